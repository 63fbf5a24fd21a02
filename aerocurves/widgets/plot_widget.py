from PySide6 import QtCore, QtGui, QtWidgets

from aerocurves.core import CurveEditor, MonotoneSpline, PlotState, sort_points
from aerocurves.widgets.utils import LinearScale, grid_ticks

MARGIN = (50.0, 20.0, 20.0, 40.0)  # left, top, right, bottom


class PlotWidget(QtWidgets.QWidget):
    """
    Draws the active plot of a CurveEditor and turns mouse gestures into
    editor calls. Holds no curve data of its own.

      - click a point: select it (ctrl/shift toggles)
      - drag a point: move the selection
      - drag on empty space: range-select by x (ctrl/shift adds)
      - double-click: remove the point under the cursor, or add one
    """

    plotChanged = QtCore.Signal()

    def __init__(self, editor: CurveEditor, parent=None):
        super().__init__(parent)
        self._editor = editor
        self._hit_radius = 7.0
        self._press_pos: QtCore.QPointF | None = None
        self._brush_from: float | None = None
        self._brush_additive = False
        self._brush_moved = False
        self._pixmaps: dict[str, QtGui.QPixmap] = {}

        self.setMinimumSize(320, 240)
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

    # ---- geometry -----------------------------------------------------------
    def _inner(self) -> QtCore.QRectF:
        left, top, right, bottom = MARGIN
        return QtCore.QRectF(left, top, max(1.0, self.width() - left - right),
                             max(1.0, self.height() - top - bottom))

    def scales(self, plot: PlotState) -> tuple[LinearScale, LinearScale]:
        r = self._inner()
        xs = LinearScale(plot.domain_x, (r.left(), r.right()))
        ys = LinearScale(plot.domain_y, (r.bottom(), r.top()))
        return xs, ys

    def _point_at(self, plot: PlotState, pos: QtCore.QPointF):
        xs, ys = self.scales(plot)
        r2 = self._hit_radius ** 2
        for p in reversed(plot.points):
            dx = xs(p.x) - pos.x()
            dy = ys(p.y) - pos.y()
            if dx * dx + dy * dy <= r2:
                return p
        return None

    def _changed(self):
        self.update()
        self.plotChanged.emit()

    # ---- mouse events -------------------------------------------------------
    def mousePressEvent(self, e: QtGui.QMouseEvent):
        plot = self._editor.active_plot
        if plot is None or e.button() != QtCore.Qt.MouseButton.LeftButton:
            return
        pos = QtCore.QPointF(e.position())
        modifier = bool(e.modifiers() & (QtCore.Qt.KeyboardModifier.ControlModifier
                                         | QtCore.Qt.KeyboardModifier.ShiftModifier))
        hit = self._point_at(plot, pos)
        self._press_pos = pos
        if hit is not None:
            if modifier:
                self._editor.toggle(hit.id)
            elif hit.id not in plot.selection:
                self._editor.select([hit.id])
            self._editor.begin_drag()
        else:
            xs, _ = self.scales(plot)
            self._brush_from = xs.invert(pos.x())
            self._brush_additive = modifier
            self._brush_moved = False
        self._changed()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent):
        plot = self._editor.active_plot
        if plot is None or self._press_pos is None:
            return
        pos = QtCore.QPointF(e.position())
        xs, ys = self.scales(plot)
        if self._editor.dragging:
            dx = xs.invert(pos.x()) - xs.invert(self._press_pos.x())
            dy = ys.invert(pos.y()) - ys.invert(self._press_pos.y())
            self._editor.drag_to(dx, dy)
            self._changed()
        elif self._brush_from is not None:
            self._brush_moved = True
            self._editor.select_range(self._brush_from, xs.invert(pos.x()), self._brush_additive)
            self._changed()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent):
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            return
        if self._editor.dragging:
            self._editor.end_drag()
        elif self._brush_from is not None:
            if not self._brush_moved and not self._brush_additive:
                self._editor.select([])
            self._editor.clear_brush()
        self._press_pos = None
        self._brush_from = None
        self._changed()

    def mouseDoubleClickEvent(self, e: QtGui.QMouseEvent):
        plot = self._editor.active_plot
        if plot is None:
            return
        pos = QtCore.QPointF(e.position())
        hit = self._point_at(plot, pos)
        if hit is not None:
            self._editor.remove_point(hit.id)
        else:
            xs, ys = self.scales(plot)
            r = self._inner()
            px = min(max(pos.x(), r.left()), r.right())
            py = min(max(pos.y(), r.top()), r.bottom())
            self._editor.add_point(xs.invert(px), ys.invert(py))
        self._changed()

    # ---- painting -----------------------------------------------------------
    def _pixmap(self, path: str) -> QtGui.QPixmap | None:
        if path not in self._pixmaps:
            self._pixmaps[path] = QtGui.QPixmap(path)
        pm = self._pixmaps[path]
        return None if pm.isNull() else pm

    def _paint_background(self, p: QtGui.QPainter, plot: PlotState):
        bg = plot.background
        if not bg.image:
            return
        pm = self._pixmap(bg.image)
        if pm is None:
            return
        r = self._inner()
        target = QtCore.QRectF(r.left() + bg.offset_x, r.top() + bg.offset_y,
                               r.width() * bg.scale_x, r.height() * bg.scale_y)
        p.save()
        p.setClipRect(r)
        p.setOpacity(bg.opacity)
        p.drawPixmap(target, pm, QtCore.QRectF(pm.rect()))
        p.restore()

    def _paint_grid(self, p: QtGui.QPainter, plot: PlotState, xs: LinearScale, ys: LinearScale):
        r = self._inner()
        p.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 30), 1.0))
        if plot.show_grid_x:
            for t in grid_ticks(plot.domain_x, plot.snap_precision_x):
                p.drawLine(QtCore.QPointF(xs(t), r.top()), QtCore.QPointF(xs(t), r.bottom()))
        if plot.show_grid_y:
            for t in grid_ticks(plot.domain_y, plot.snap_precision_y):
                p.drawLine(QtCore.QPointF(r.left(), ys(t)), QtCore.QPointF(r.right(), ys(t)))
        p.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 200), 1.0))
        p.drawRect(r)
        p.drawText(QtCore.QPointF(r.left(), r.bottom() + 16), f"{plot.domain_x[0]:g}")
        p.drawText(QtCore.QPointF(r.right() - 30, r.bottom() + 16), f"{plot.domain_x[1]:g}")
        p.drawText(QtCore.QPointF(4, r.bottom()), f"{plot.domain_y[0]:g}")
        p.drawText(QtCore.QPointF(4, r.top() + 10), f"{plot.domain_y[1]:g}")

    def paintEvent(self, _):
        plot = self._editor.active_plot
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        p.fillRect(self.rect(), QtGui.QColor(255, 255, 255))
        if plot is None:
            p.end()
            return
        xs, ys = self.scales(plot)

        self._paint_background(p, plot)
        self._paint_grid(p, plot, xs, ys)

        if plot.brush is not None:
            r = self._inner()
            x0, x1 = sorted((xs(plot.brush[0]), xs(plot.brush[1])))
            p.fillRect(QtCore.QRectF(x0, r.top(), x1 - x0, r.height()), QtGui.QColor(30, 120, 255, 40))

        # points may be out of order mid-drag
        path = MonotoneSpline(sort_points(plot.points)).make_qpath(xs, ys)
        p.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 180), 2.0))
        p.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        p.drawPath(path)

        selected = plot.live_selection
        r = self._hit_radius
        p.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 200), 1.0))
        for pt in plot.points:
            color = QtGui.QColor(30, 120, 255) if pt.id in selected else QtGui.QColor(255, 255, 255, 230)
            p.setBrush(color)
            p.drawEllipse(QtCore.QPointF(xs(pt.x), ys(pt.y)), r * 0.6, r * 0.6)

        p.end()

