"""
The per-plot aggregate and the transitions that edit it.

`PlotState` is a frozen value: every transition takes a plot and returns a
new one (or the same object when nothing changes). Numeric text is expected to
be validated before it reaches these functions; see `math.parse_number`.
"""
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Callable, Collection, Iterable, Literal, Sequence

from . import geometry
from .drag import DragSession
from .geometry import Direction, Points, Selection, sort_points
from .math import Domain, Point, PointId, XY, clamp, is_finite_number, snap
from .splines import MonotoneSpline

logger = logging.getLogger(__name__)

Axis = Literal["x", "y"]
MakeId = Callable[[], str]

SEED_POINT_COUNT = 12
DEFAULT_DOMAIN_X: Domain = (-180.0, 180.0)
DEFAULT_DOMAIN_Y: Domain = (-1.0, 1.0)
DEFAULT_SNAP_PRECISION = 1.0
MAX_NORMALIZE_POINTS = 400
BACKGROUND_OPACITY_RANGE: Domain = (0.0, 1.0)
BACKGROUND_SCALE_RANGE: Domain = (0.1, 10.0)


@dataclass(frozen=True)
class Background:
    """
    Tracing image drawn behind the curve. Only carried alongside the plot;
    nothing in the geometry reads it.
    """
    image: str | None = None
    opacity: float = 0.5
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0


@dataclass(frozen=True)
class PlotState:
    id: str
    name: str
    points: Points = ()
    selection: Selection = frozenset()
    brush: tuple[float, float] | None = None
    domain_x: Domain = DEFAULT_DOMAIN_X
    domain_y: Domain = DEFAULT_DOMAIN_Y
    snap_x: bool = False
    snap_y: bool = False
    snap_precision_x: float = DEFAULT_SNAP_PRECISION
    snap_precision_y: float = DEFAULT_SNAP_PRECISION
    show_grid_x: bool = True
    show_grid_y: bool = True
    background: Background = field(default_factory=Background)

    # ---- read-only views ----------------------------------------------------
    @property
    def live_selection(self) -> Selection:
        return geometry.live_selection(self.points, self.selection)

    @property
    def selected_points(self) -> list[Point]:
        return geometry.selected_points(self.points, self.selection)

    def selection_center(self) -> XY | None:
        return geometry.selection_center(self.points, self.selection)

    def spline(self) -> MonotoneSpline:
        return MonotoneSpline(self.points)

    def evaluate(self, x: float) -> float:
        return self.spline().evaluate(x)

    def domain(self, axis: Axis) -> Domain:
        return self.domain_x if _axis(axis) == "x" else self.domain_y

    def snap_config(self, axis: Axis) -> tuple[bool, float]:
        if _axis(axis) == "x":
            return self.snap_x, self.snap_precision_x
        return self.snap_y, self.snap_precision_y

    # ---- serialization -------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "points": [{"id": p.id, "x": p.x, "y": p.y} for p in self.points],
            "selection": sorted(self.selection),
            "brush": list(self.brush) if self.brush is not None else None,
            "domain_x": list(self.domain_x),
            "domain_y": list(self.domain_y),
            "snap_x": self.snap_x,
            "snap_y": self.snap_y,
            "snap_precision_x": self.snap_precision_x,
            "snap_precision_y": self.snap_precision_y,
            "show_grid_x": self.show_grid_x,
            "show_grid_y": self.show_grid_y,
            "background": {
                "image": self.background.image,
                "opacity": self.background.opacity,
                "offset_x": self.background.offset_x,
                "offset_y": self.background.offset_y,
                "scale_x": self.background.scale_x,
                "scale_y": self.background.scale_y,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlotState":
        pts = sort_points(Point(str(p["id"]), float(p["x"]), float(p["y"])) for p in data["points"])
        brush = data.get("brush")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            points=pts,
            selection=frozenset(data.get("selection", ())),
            brush=tuple(map(float, brush)) if brush is not None else None,
            domain_x=tuple(map(float, data.get("domain_x", DEFAULT_DOMAIN_X))),
            domain_y=tuple(map(float, data.get("domain_y", DEFAULT_DOMAIN_Y))),
            snap_x=bool(data.get("snap_x", False)),
            snap_y=bool(data.get("snap_y", False)),
            snap_precision_x=float(data.get("snap_precision_x", DEFAULT_SNAP_PRECISION)),
            snap_precision_y=float(data.get("snap_precision_y", DEFAULT_SNAP_PRECISION)),
            show_grid_x=bool(data.get("show_grid_x", True)),
            show_grid_y=bool(data.get("show_grid_y", True)),
            background=Background(**data.get("background", {})),
        )


def _axis(axis: str) -> str:
    if axis not in ("x", "y"):
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
    return axis


def seed_points(make_id: MakeId, domain_x: Domain = DEFAULT_DOMAIN_X,
                count: int = SEED_POINT_COUNT) -> Points:
    """One period of a half-amplitude sine wave across the domain."""
    lo, hi = domain_x
    out = []
    for i in range(count):
        t = i / (count - 1)
        out.append(Point(make_id(), lo + (hi - lo) * t, math.sin(t * math.pi * 2) * 0.5))
    return tuple(out)


# ---- lifecycle --------------------------------------------------------------

def create_plot(name: str, make_id: MakeId) -> PlotState:
    return PlotState(id=make_id(), name=name, points=seed_points(make_id))


def duplicate_plot(plot: PlotState, make_id: MakeId, name: str | None = None) -> PlotState:
    """Deep copy with a new plot id and new point ids; selection is dropped."""
    points = tuple(Point(make_id(), p.x, p.y) for p in plot.points)
    return replace(
        plot,
        id=make_id(),
        name=name if name is not None else f"{plot.name} copy",
        points=points,
        selection=frozenset(),
        brush=None,
    )


def rename_plot(plot: PlotState, name: str) -> PlotState:
    return replace(plot, name=name if isinstance(name, str) else "")


# ---- configuration ----------------------------------------------------------

def set_domain(plot: PlotState, axis: Axis, index: int, value: float) -> PlotState:
    """
    Move one bound of an axis domain. Edits that are not finite or that would
    leave min >= max are refused. Points are not moved.
    """
    if index not in (0, 1):
        raise IndexError(index)
    current = plot.domain(axis)
    if not is_finite_number(value):
        logger.debug("Refusing non-finite %s domain bound %r", axis, value)
        return plot
    bounds = list(current)
    bounds[index] = float(value)
    if bounds[0] >= bounds[1]:
        logger.debug("Refusing empty %s domain %r", axis, bounds)
        return plot
    if axis == "x":
        return replace(plot, domain_x=(bounds[0], bounds[1]))
    return replace(plot, domain_y=(bounds[0], bounds[1]))


def set_snap(plot: PlotState, axis: Axis, enabled: bool) -> PlotState:
    if _axis(axis) == "x":
        return replace(plot, snap_x=bool(enabled))
    return replace(plot, snap_y=bool(enabled))


def set_grid_visible(plot: PlotState, axis: Axis, visible: bool) -> PlotState:
    if _axis(axis) == "x":
        return replace(plot, show_grid_x=bool(visible))
    return replace(plot, show_grid_y=bool(visible))


def set_snap_precision(plot: PlotState, axis: Axis, value: float) -> PlotState:
    _axis(axis)
    if not is_finite_number(value) or value <= 0:
        logger.debug("Refusing snap step %r for %s", value, axis)
        return plot
    if axis == "x":
        return replace(plot, snap_precision_x=float(value))
    return replace(plot, snap_precision_y=float(value))


# ---- selection --------------------------------------------------------------

def set_selection(plot: PlotState, ids: Iterable[PointId]) -> PlotState:
    return replace(plot, selection=frozenset(ids))


def toggle_selection(plot: PlotState, point_id: PointId) -> PlotState:
    return replace(plot, selection=plot.selection ^ {point_id})


def set_brush(plot: PlotState, brush: tuple[float, float] | None) -> PlotState:
    return replace(plot, brush=brush)


def select_range(plot: PlotState, x0: float, x1: float, additive: bool = False) -> PlotState:
    """Select by x range and remember the range as the brush."""
    ids = geometry.select_range(plot.points, x0, x1, plot.selection, additive)
    return replace(plot, selection=ids, brush=(x0, x1))


# ---- point edits ------------------------------------------------------------

def replace_points(plot: PlotState, points: Sequence[Point],
                   selection: Collection[PointId] | None = None) -> PlotState:
    if selection is None:
        return replace(plot, points=sort_points(points))
    return replace(plot, points=sort_points(points), selection=frozenset(selection))


def _commit(plot: PlotState, points: Sequence[Point], selection: Collection[PointId] | None = None) -> PlotState:
    if points is plot.points and (selection is None or frozenset(selection) == plot.selection):
        return plot
    return replace_points(plot, points, selection)


def add_point(plot: PlotState, x: float, y: float, make_id: MakeId) -> PlotState:
    x = clamp(snap(x, plot.snap_x, plot.snap_precision_x), plot.domain_x)
    y = clamp(snap(y, plot.snap_y, plot.snap_precision_y), plot.domain_y)
    point = Point(make_id(), x, y)
    return replace(plot, points=geometry.insert_point(plot.points, point), selection=frozenset())


def remove_point(plot: PlotState, point_id: PointId) -> PlotState:
    points = geometry.remove_point(plot.points, point_id)
    if points is plot.points:
        return plot
    return replace(plot, points=points, selection=plot.selection - {point_id})


def delete_selection(plot: PlotState) -> PlotState:
    points = geometry.delete_selection(plot.points, plot.selection)
    if points is plot.points:
        return plot
    return replace(plot, points=points, selection=frozenset())


def flip_vertical(plot: PlotState) -> PlotState:
    if not plot.live_selection:
        return plot
    points = geometry.flip_y(plot.points, plot.selection, plot.domain_y,
                             plot.snap_y, plot.snap_precision_y)
    return replace(plot, points=points)


def flip_horizontal(plot: PlotState) -> PlotState:
    return _commit(plot, geometry.flip_x(plot.points, plot.selection, plot.domain_x,
                                         plot.snap_x, plot.snap_precision_x))


def trim(plot: PlotState) -> PlotState:
    return _commit(plot, geometry.trim(plot.points, plot.selection))


def trim_left(plot: PlotState) -> PlotState:
    return _commit(plot, geometry.trim_left(plot.points, plot.selection))


def trim_right(plot: PlotState) -> PlotState:
    return _commit(plot, geometry.trim_right(plot.points, plot.selection))


def mirror(plot: PlotState, direction: Direction, make_id: MakeId) -> PlotState:
    points, selection = geometry.mirror(plot.points, plot.selection, direction, make_id,
                                        plot.domain_x, plot.domain_y)
    return _commit(plot, points, selection)


def duplicate(plot: PlotState, direction: Direction, make_id: MakeId) -> PlotState:
    points, selection = geometry.duplicate(plot.points, plot.selection, direction, make_id,
                                           plot.domain_x, plot.domain_y)
    return _commit(plot, points, selection)


def paste_points(plot: PlotState, incoming: Sequence[XY], make_id: MakeId) -> PlotState:
    points, selection = geometry.replace_selection_with_points(
        plot.points, plot.selection, incoming, plot.domain_x, plot.domain_y, make_id)
    return _commit(plot, points, selection)


# ---- moves ------------------------------------------------------------------

def start_drag(plot: PlotState) -> DragSession:
    return DragSession(
        plot.points, plot.live_selection, plot.domain_x, plot.domain_y,
        snap_x=plot.snap_x, snap_y=plot.snap_y,
        precision_x=plot.snap_precision_x, precision_y=plot.snap_precision_y,
    )


def move_selection_to(plot: PlotState, axis: Axis, value: float) -> PlotState:
    """
    Shift the selection so its center lands on `value` along one axis.
    Goes through a drag session, so x moves stop at unselected neighbours.
    The other axis is left alone.
    """
    center = plot.selection_center()
    if center is None:
        return plot
    session = start_drag(plot)
    if _axis(axis) == "x":
        moved = session.move(value - center[0], 0.0, axes="x")
    else:
        moved = session.move(0.0, value - center[1], axes="y")
    return replace(plot, points=sort_points(moved))


def normalize_to_domain(plot: PlotState, make_id: MakeId) -> PlotState:
    """
    Regenerate the point set by sampling the current curve across domain_x:
    on the X snap grid when X snapping is on, otherwise with as many evenly
    spaced points as there are now. A grid finer than MAX_NORMALIZE_POINTS
    falls back to the even spacing.
    """
    if len(plot.points) < geometry.MIN_POINTS:
        return plot
    curve = plot.spline()
    x0, x1 = plot.domain_x

    step = plot.snap_precision_x
    count = 0
    if plot.snap_x and is_finite_number(step) and step > 0:
        cells = (x1 - x0) / step
        # room for the appended domain end
        if cells < MAX_NORMALIZE_POINTS - 1:
            count = int(math.floor(cells + 1e-9)) + 1
        else:
            logger.debug("Snap step %r is too fine to normalize onto", step)
    if count:
        xs = [x0 + i * step for i in range(count)]
        if xs[-1] < x1:
            xs.append(x1)
    else:
        n = len(plot.points)
        xs = [x0 + (x1 - x0) * i / (n - 1) for i in range(n)]
    if len(xs) < geometry.MIN_POINTS:
        return plot

    points = tuple(
        Point(make_id(), x, clamp(snap(curve.evaluate(x), plot.snap_y, plot.snap_precision_y), plot.domain_y))
        for x in xs
    )
    return replace(plot, points=points, selection=frozenset(), brush=None)


# ---- background -------------------------------------------------------------

def set_background_image(plot: PlotState, image: str | None) -> PlotState:
    return replace(plot, background=replace(plot.background, image=image))


def set_background_opacity(plot: PlotState, opacity: float) -> PlotState:
    return replace(plot, background=replace(plot.background, opacity=clamp(opacity, BACKGROUND_OPACITY_RANGE)))


def set_background_offset(plot: PlotState, axis: Axis, value: float) -> PlotState:
    if _axis(axis) == "x":
        return replace(plot, background=replace(plot.background, offset_x=value))
    return replace(plot, background=replace(plot.background, offset_y=value))


def set_background_scale(plot: PlotState, axis: Axis, value: float) -> PlotState:
    value = clamp(value, BACKGROUND_SCALE_RANGE)
    if _axis(axis) == "x":
        return replace(plot, background=replace(plot.background, scale_x=value))
    return replace(plot, background=replace(plot.background, scale_y=value))


def clear_background(plot: PlotState) -> PlotState:
    return replace(plot, background=Background())
