from PySide6 import QtCore, QtWidgets

from aerocurves.core import CurveEditor
from aerocurves.core import plot as P


class SidePanel(QtWidgets.QWidget):
    """
    Form fields for the active plot. Text is committed on editingFinished and
    parsed by the editor; unparsable text is thrown away and the field
    shows the committed value again on the next refresh.
    """

    edited = QtCore.Signal()

    def __init__(self, editor: CurveEditor, parent=None):
        super().__init__(parent)
        self._editor = editor

        self._coord = {a: QtWidgets.QLineEdit() for a in "xy"}
        self._domain = {(a, i): QtWidgets.QLineEdit() for a in "xy" for i in (0, 1)}
        self._step = {a: QtWidgets.QLineEdit() for a in "xy"}
        self._snap = {a: QtWidgets.QCheckBox(f"Snap {a.upper()}") for a in "xy"}
        self._grid = {a: QtWidgets.QCheckBox(f"Grid {a.upper()}") for a in "xy"}
        self._name = QtWidgets.QLineEdit()
        self._opacity = QtWidgets.QDoubleSpinBox()
        self._opacity.setRange(0.0, 1.0)
        self._opacity.setSingleStep(0.05)
        self._offset = {a: QtWidgets.QDoubleSpinBox() for a in "xy"}
        self._scale = {a: QtWidgets.QDoubleSpinBox() for a in "xy"}
        for a in "xy":
            self._offset[a].setRange(-10000.0, 10000.0)
            self._offset[a].setPrefix(f"{a.upper()} ")
            self._scale[a].setRange(*P.BACKGROUND_SCALE_RANGE)
            self._scale[a].setSingleStep(0.1)
            self._scale[a].setPrefix(f"{a.upper()} x")
        self._image_btn = QtWidgets.QPushButton("Image…")
        self._clear_btn = QtWidgets.QPushButton("Clear")
        self._selected = QtWidgets.QLabel("0")

        form = QtWidgets.QFormLayout(self)
        form.addRow("Name", self._name)
        form.addRow("Selection X", self._coord["x"])
        form.addRow("Selection Y", self._coord["y"])
        form.addRow("Selected", self._selected)
        for a in "xy":
            row = QtWidgets.QHBoxLayout()
            row.addWidget(self._domain[(a, 0)])
            row.addWidget(self._domain[(a, 1)])
            form.addRow(f"Domain {a.upper()}", row)
        for a in "xy":
            row = QtWidgets.QHBoxLayout()
            row.addWidget(self._step[a])
            row.addWidget(self._snap[a])
            row.addWidget(self._grid[a])
            form.addRow(f"Step {a.upper()}", row)
        bg_row = QtWidgets.QHBoxLayout()
        bg_row.addWidget(self._image_btn)
        bg_row.addWidget(self._clear_btn)
        bg_row.addWidget(self._opacity)
        form.addRow("Background", bg_row)
        offset_row = QtWidgets.QHBoxLayout()
        scale_row = QtWidgets.QHBoxLayout()
        for a in "xy":
            offset_row.addWidget(self._offset[a])
            scale_row.addWidget(self._scale[a])
        form.addRow("Image offset", offset_row)
        form.addRow("Image scale", scale_row)

        self._name.editingFinished.connect(lambda: self._commit(self._editor.rename, self._name.text()))
        for a in "xy":
            self._coord[a].editingFinished.connect(
                lambda a=a: self._commit(self._editor.set_coordinate, a, self._coord[a].text()))
            self._step[a].editingFinished.connect(
                lambda a=a: self._commit(self._editor.set_snap_step, a, self._step[a].text()))
            self._snap[a].toggled.connect(lambda on, a=a: self._commit(self._editor.set_snap, a, on))
            self._grid[a].toggled.connect(lambda on, a=a: self._commit(self._editor.set_grid_visible, a, on))
            for i in (0, 1):
                self._domain[(a, i)].editingFinished.connect(
                    lambda a=a, i=i: self._commit(self._editor.set_domain_bound, a, i, self._domain[(a, i)].text()))
        self._opacity.valueChanged.connect(
            lambda v: self._commit(self._editor.update, P.set_background_opacity, v))
        for a in "xy":
            self._offset[a].valueChanged.connect(
                lambda v, a=a: self._commit(self._editor.update, P.set_background_offset, a, v))
            self._scale[a].valueChanged.connect(
                lambda v, a=a: self._commit(self._editor.update, P.set_background_scale, a, v))
        self._image_btn.clicked.connect(self._pick_image)
        self._clear_btn.clicked.connect(lambda: self._commit(self._editor.update, P.clear_background))

        self.refresh()

    def _commit(self, fn, *args):
        fn(*args)
        self.refresh()
        self.edited.emit()

    @QtCore.Slot()
    def _pick_image(self):
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Background image", "", "Images (*.png *.jpg *.bmp)")
        if path:
            self._commit(self._editor.update, P.set_background_image, path)

    @QtCore.Slot()
    def refresh(self):
        plot = self._editor.active_plot
        self.setEnabled(plot is not None)
        if plot is None:
            return
        widgets = [self._name, self._opacity, *self._snap.values(), *self._grid.values(),
                   *self._offset.values(), *self._scale.values()]
        for w in widgets:
            w.blockSignals(True)

        self._name.setText(plot.name)
        center = plot.selection_center()
        for k, a in enumerate("xy"):
            self._coord[a].setText(f"{center[k]:.2f}" if center else "")
            self._coord[a].setEnabled(center is not None)
            enabled, step = plot.snap_config(a)
            self._step[a].setText(f"{step:g}")
            self._snap[a].setChecked(enabled)
            for i in (0, 1):
                self._domain[(a, i)].setText(f"{plot.domain(a)[i]:g}")
        self._grid["x"].setChecked(plot.show_grid_x)
        self._grid["y"].setChecked(plot.show_grid_y)
        bg = plot.background
        self._opacity.setValue(bg.opacity)
        self._offset["x"].setValue(bg.offset_x)
        self._offset["y"].setValue(bg.offset_y)
        self._scale["x"].setValue(bg.scale_x)
        self._scale["y"].setValue(bg.scale_y)
        self._selected.setText(str(len(plot.live_selection)))

        for w in widgets:
            w.blockSignals(False)
