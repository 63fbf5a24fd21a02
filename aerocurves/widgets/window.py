import logging

from PySide6 import QtCore, QtGui, QtWidgets

from aerocurves.core import CurveEditor
from aerocurves.widgets.plot_selector import PlotSwitchWidget
from aerocurves.widgets.plot_widget import PlotWidget
from aerocurves.widgets.side_panel import SidePanel
from aerocurves.widgets.toolbar import OperationBar

logger = logging.getLogger(__name__)


class EditorWindow(QtWidgets.QWidget):
    def __init__(self, editor: CurveEditor | None = None):
        super().__init__()
        self.editor = editor or CurveEditor()

        self.plot_selector = PlotSwitchWidget(self.editor, self)
        self.operations = OperationBar(self.editor, self)
        self.plot = PlotWidget(self.editor, self)
        self.side_panel = SidePanel(self.editor, self)

        self.main_layout = QtWidgets.QHBoxLayout()
        self.layout = QtWidgets.QVBoxLayout(self)
        self.main_layout.addWidget(self.plot, stretch=1)
        self.main_layout.addWidget(self.side_panel, alignment=QtCore.Qt.AlignmentFlag.AlignTop)
        self.layout.addWidget(self.plot_selector, alignment=QtCore.Qt.AlignmentFlag.AlignTop)
        self.layout.addWidget(self.operations, alignment=QtCore.Qt.AlignmentFlag.AlignTop)
        self.layout.addLayout(self.main_layout)

        self.plot.plotChanged.connect(self.side_panel.refresh)
        self.operations.operationRun.connect(self.refresh)
        self.side_panel.edited.connect(self.refresh)
        self.plot_selector.plotsChanged.connect(self.refresh)

        shortcuts = {
            "Ctrl+D": lambda: self._run("duplicate-right"),
            "Ctrl+Shift+D": lambda: self._run("duplicate-left"),
            "Ctrl+C": self.copy,
            "Ctrl+V": self.paste,
            "Ctrl+Z": self.undo,
            "Ctrl+Shift+Z": self.redo,
            "Delete": lambda: self._run("delete-selection"),
            "Backspace": lambda: self._run("delete-selection"),
        }
        for keys, slot in shortcuts.items():
            QtGui.QShortcut(QtGui.QKeySequence(keys), self, activated=slot)

    def _focus_in_text(self) -> bool:
        return isinstance(QtWidgets.QApplication.focusWidget(), QtWidgets.QLineEdit)

    def _run(self, name: str):
        if self._focus_in_text():
            return
        self.editor.run(name)
        self.refresh()

    @QtCore.Slot()
    def copy(self):
        text = self.editor.copy_selection()
        if text is None:
            return
        QtGui.QGuiApplication.clipboard().setText(text)
        logger.debug("Copied selection to the system clipboard")

    @QtCore.Slot()
    def paste(self):
        if self._focus_in_text():
            return
        self.editor.paste(QtGui.QGuiApplication.clipboard().text())
        self.refresh()

    @QtCore.Slot()
    def undo(self):
        if self._focus_in_text():
            return
        self.editor.undo()
        self.refresh()

    @QtCore.Slot()
    def redo(self):
        if self._focus_in_text():
            return
        self.editor.redo()
        self.refresh()

    @QtCore.Slot()
    def refresh(self):
        self.plot_selector.rebuild()
        self.side_panel.refresh()
        self.plot.update()
