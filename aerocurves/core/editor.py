import logging
from dataclasses import replace
from typing import Callable

from . import operations  # noqa: F401  (fills operation_registry)
from . import plot as P
from .clipboard import parse_points, serialize_points
from .drag import DragSession
from .history import HISTORY_LIMIT, History
from .ids import IdFactory, uuid_ids
from .math import XY, PointId, parse_number
from .plot import Axis, PlotState
from .registries import operation_registry
from .workspace import Workspace

logger = logging.getLogger(__name__)


class CurveEditor:
    """
    Controller between input handlers and the pure core.

    Owns the undo history of the whole workspace and the id factory. Every
    method works on the active plot; with no active plot they do nothing.
    Selection and brush changes are not undo steps; point and configuration
    edits are.
    """

    def __init__(self, workspace: Workspace | None = None, make_id: IdFactory | None = None,
                 history_limit: int = HISTORY_LIMIT):
        self._make_id = make_id or uuid_ids()
        self._history: History[Workspace] = History(
            workspace if workspace is not None else Workspace.initial(self._make_id),
            limit=history_limit,
        )
        self._drag: DragSession | None = None
        self._drag_plot_id: str | None = None
        self._last_copied: list[XY] | None = None

    # ---- accessors ----------------------------------------------------------
    @property
    def workspace(self) -> Workspace:
        return self._history.state

    @property
    def history(self) -> History[Workspace]:
        return self._history

    @property
    def active_plot(self) -> PlotState | None:
        return self.workspace.active_plot

    @property
    def make_id(self) -> IdFactory:
        return self._make_id

    @property
    def dragging(self) -> bool:
        return self._drag is not None

    # ---- plumbing -----------------------------------------------------------
    def _store(self, plot: PlotState, *, record: bool = True, transient: bool = False) -> PlotState:
        ws = self.workspace.replace_plot(plot)
        if ws is self.workspace:
            return plot
        if transient:
            self._history.apply_transient(ws)
        elif record:
            self._history.apply(ws)
        else:
            self._history.replace(ws)
        return plot

    def update(self, fn: Callable[..., PlotState], *args, transient: bool = False,
               record: bool = True, **kwargs) -> PlotState | None:
        """Run a plot transition on the active plot and keep the result."""
        plot = self.active_plot
        if plot is None:
            return None
        new = fn(plot, *args, **kwargs)
        if new is plot:
            return plot
        return self._store(new, record=record, transient=transient)

    def run(self, name: str) -> PlotState | None:
        op = operation_registry[name]
        logger.debug("Running %s", name)
        return self.update(op, self._make_id)

    # ---- plots --------------------------------------------------------------
    def add_plot(self, name: str | None = None) -> PlotState:
        ws = self._history.apply(self.workspace.add_plot(self._make_id, name))
        return ws.active_plot

    def remove_plot(self, plot_id: str | None = None) -> None:
        plot_id = plot_id or self.workspace.active_id
        if plot_id is None:
            return
        self._history.apply(self.workspace.remove_plot(plot_id))

    def duplicate_plot(self, plot_id: str | None = None) -> PlotState | None:
        plot_id = plot_id or self.workspace.active_id
        if plot_id is None:
            return None
        ws = self._history.apply(self.workspace.duplicate_plot(plot_id, self._make_id))
        return ws.active_plot

    def set_active(self, plot_id: str | None) -> None:
        self._history.replace(self.workspace.set_active(plot_id))

    def rename(self, name: str) -> PlotState | None:
        return self.update(P.rename_plot, name)

    # ---- selection ----------------------------------------------------------
    def select(self, ids) -> PlotState | None:
        return self.update(P.set_selection, ids, record=False)

    def toggle(self, point_id: PointId) -> PlotState | None:
        return self.update(P.toggle_selection, point_id, record=False)

    def select_range(self, x0: float, x1: float, additive: bool = False) -> PlotState | None:
        return self.update(P.select_range, x0, x1, additive, record=False)

    def clear_brush(self) -> PlotState | None:
        return self.update(P.set_brush, None, record=False)

    # ---- points -------------------------------------------------------------
    def add_point(self, x: float, y: float) -> PlotState | None:
        return self.update(P.add_point, x, y, self._make_id)

    def remove_point(self, point_id: PointId) -> PlotState | None:
        return self.update(P.remove_point, point_id)

    # ---- drag ---------------------------------------------------------------
    def begin_drag(self) -> bool:
        plot = self.active_plot
        if plot is None:
            return False
        session = P.start_drag(plot)
        if not session:
            return False
        self._drag = session
        self._drag_plot_id = plot.id
        return True

    def drag_to(self, dx: float, dy: float) -> PlotState | None:
        if self._drag is None:
            return None
        plot = self.workspace[self._drag_plot_id]
        # unsorted until end_drag
        points = self._drag.move(dx, dy)
        if points == plot.points:
            return plot
        return self._store(replace(plot, points=points), transient=True)

    def end_drag(self) -> PlotState | None:
        if self._drag is None:
            return None
        session, plot_id = self._drag, self._drag_plot_id
        self._drag = self._drag_plot_id = None
        if not self._history.in_transient:
            return self.workspace[plot_id]
        points = session.commit()
        if points == session.origin:
            # moved and came back
            self._history.discard_transient()
            return self.workspace[plot_id]
        plot = replace(self.workspace[plot_id], points=points)
        self._history.commit(self.workspace.replace_plot(plot))
        return plot

    def cancel_drag(self) -> None:
        if self._drag is None:
            return
        self._drag = self._drag_plot_id = None
        self._history.discard_transient()

    # ---- clipboard ----------------------------------------------------------
    def copy_selection(self) -> str | None:
        plot = self.active_plot
        if plot is None:
            return None
        chosen = plot.selected_points
        if not chosen:
            return None
        self._last_copied = [p.to_xy() for p in chosen]
        return serialize_points(chosen)

    def paste(self, text: str | None = None) -> PlotState | None:
        incoming = parse_points(text) if text else None
        if incoming is None:
            incoming = self._last_copied
        if not incoming:
            logger.debug("Nothing to paste")
            return self.active_plot
        return self.update(P.paste_points, incoming, self._make_id)

    # ---- text fields --------------------------------------------------------
    def set_coordinate(self, axis: Axis, text) -> bool:
        value = parse_number(text)
        if value is None:
            return False
        self.update(P.move_selection_to, axis, value)
        return True

    def set_domain_bound(self, axis: Axis, index: int, text) -> bool:
        value = parse_number(text)
        if value is None:
            return False
        self.update(P.set_domain, axis, index, value)
        return True

    def set_snap_step(self, axis: Axis, text) -> bool:
        value = parse_number(text)
        if value is None or value <= 0:
            return False
        self.update(P.set_snap_precision, axis, value)
        return True

    def set_snap(self, axis: Axis, enabled: bool) -> PlotState | None:
        return self.update(P.set_snap, axis, enabled)

    def set_grid_visible(self, axis: Axis, visible: bool) -> PlotState | None:
        return self.update(P.set_grid_visible, axis, visible)

    # ---- history ------------------------------------------------------------
    def undo(self) -> Workspace:
        self.cancel_drag()
        return self._history.undo()

    def redo(self) -> Workspace:
        self.cancel_drag()
        return self._history.redo()
