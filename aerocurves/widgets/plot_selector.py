from PySide6 import QtWidgets, QtCore

from aerocurves.core import CurveEditor


class PlotSwitchWidget(QtWidgets.QWidget):
    """
    Add/duplicate/remove buttons and a combobox selecting the active plot.
    """
    plotsChanged = QtCore.Signal()

    def __init__(self, editor: CurveEditor, parent=None):
        super().__init__(parent)
        self._editor = editor

        self._btn_new = QtWidgets.QPushButton("New plot")
        self._btn_dup = QtWidgets.QPushButton("Duplicate plot")
        self._btn_del = QtWidgets.QPushButton("Remove plot")
        self._select = QtWidgets.QComboBox()

        lay = QtWidgets.QHBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self._btn_new)
        lay.addWidget(self._btn_dup)
        lay.addWidget(self._btn_del)
        lay.addWidget(self._select)

        self._btn_new.clicked.connect(self._on_new)
        self._btn_dup.clicked.connect(self._on_duplicate)
        self._btn_del.clicked.connect(self._on_remove)
        self._select.currentIndexChanged.connect(self._on_select_changed)

        self.rebuild()

    @QtCore.Slot()
    def _on_new(self):
        self._editor.add_plot()
        self._changed()

    @QtCore.Slot()
    def _on_duplicate(self):
        self._editor.duplicate_plot()
        self._changed()

    @QtCore.Slot()
    def _on_remove(self):
        self._editor.remove_plot()
        self._changed()

    @QtCore.Slot(int)
    def _on_select_changed(self, idx: int):
        ws = self._editor.workspace
        if 0 <= idx < len(ws):
            self._editor.set_active(ws[idx].id)
            self.plotsChanged.emit()

    def _changed(self):
        self.rebuild()
        self.plotsChanged.emit()

    @QtCore.Slot()
    def rebuild(self):
        ws = self._editor.workspace
        self._select.blockSignals(True)
        self._select.clear()
        for plot in ws:
            self._select.addItem(plot.name)
        if ws.active_id is not None:
            self._select.setCurrentIndex(ws.index_of(ws.active_id))
        self._select.blockSignals(False)
        self._btn_dup.setEnabled(ws.active_id is not None)
        self._btn_del.setEnabled(ws.active_id is not None)
