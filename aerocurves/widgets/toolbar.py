from PySide6 import QtCore, QtWidgets

from aerocurves.core import CurveEditor
from aerocurves.core.registries import operation_registry


def _label(name: str) -> str:
    return name.replace("-", " ").capitalize()


class OperationBar(QtWidgets.QToolBar):
    """One button per registered operation, plus undo/redo."""

    operationRun = QtCore.Signal(str)

    def __init__(self, editor: CurveEditor, parent=None):
        super().__init__(parent)
        self._editor = editor
        self.setObjectName("OperationBar")
        self.setMovable(False)
        self.setFloatable(False)

        for name in operation_registry:
            btn = QtWidgets.QPushButton(_label(name))
            btn.clicked.connect(lambda _=False, n=name: self._run(n))
            self.addWidget(btn)

        self.addSeparator()
        self.undo_button = QtWidgets.QPushButton("Undo")
        self.redo_button = QtWidgets.QPushButton("Redo")
        self.addWidget(self.undo_button)
        self.addWidget(self.redo_button)
        self.undo_button.clicked.connect(self._undo)
        self.redo_button.clicked.connect(self._redo)

    @QtCore.Slot(str)
    def _run(self, name: str):
        self._editor.run(name)
        self.operationRun.emit(name)

    @QtCore.Slot()
    def _undo(self):
        self._editor.undo()
        self.operationRun.emit("undo")

    @QtCore.Slot()
    def _redo(self):
        self._editor.redo()
        self.operationRun.emit("redo")
