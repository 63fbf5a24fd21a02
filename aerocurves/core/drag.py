from dataclasses import replace
from typing import Collection, Sequence

from .geometry import Points, sort_points
from .math import Domain, Point, PointId, clamp, snap


class DragSession:
    """
    Interactive move of a selection.

    The session keeps the points as they were when the gesture started, so every
    `move(dx, dy)` is measured from those origins and never accumulates
    rounding. Each selected point is held between its nearest *unselected*
    neighbours (selected points may pass each other), then held inside the
    domain, then snapped. Order is only re-established by `commit()`.

    `move(..., axes="x")` (or `"y"`) leaves the other coordinate of every point
    exactly as it was at the start, snapping included.
    """

    def __init__(self, points: Sequence[Point], selection: Collection[PointId],
                 domain_x: Domain, domain_y: Domain, *,
                 snap_x: bool = False, snap_y: bool = False,
                 precision_x: float = 1.0, precision_y: float = 1.0):
        self._origin: Points = sort_points(points)
        ids = frozenset(selection)
        self._domain_x = domain_x
        self._domain_y = domain_y
        self._snap_x = (snap_x, precision_x)
        self._snap_y = (snap_y, precision_y)
        self._bounds = self._neighbour_bounds(ids)
        self._current: Points = self._origin

    def _neighbour_bounds(self, ids: frozenset[PointId]) -> dict[PointId, tuple[float, float]]:
        n = len(self._origin)
        left = [self._domain_x[0]] * n
        right = [self._domain_x[1]] * n

        fence = self._domain_x[0]
        for i, p in enumerate(self._origin):
            left[i] = fence
            if p.id not in ids:
                fence = p.x

        fence = self._domain_x[1]
        for i in range(n - 1, -1, -1):
            p = self._origin[i]
            right[i] = fence
            if p.id not in ids:
                fence = p.x

        return {p.id: (left[i], right[i]) for i, p in enumerate(self._origin) if p.id in ids}

    # ---- read-only views ----------------------------------------------------
    @property
    def origin(self) -> Points:
        return self._origin

    @property
    def points(self) -> Points:
        return self._current

    @property
    def dragged_ids(self) -> frozenset[PointId]:
        return frozenset(self._bounds)

    def __bool__(self) -> bool:
        return bool(self._bounds)

    # ---- protocol -----------------------------------------------------------
    def move(self, dx: float, dy: float, axes: str = "xy") -> Points:
        out = []
        for p in self._origin:
            bounds = self._bounds.get(p.id)
            if bounds is None:
                out.append(p)
                continue
            x, y = p.x, p.y
            if "x" in axes:
                x = snap(clamp(clamp(p.x + dx, bounds), self._domain_x), *self._snap_x)
            if "y" in axes:
                y = snap(clamp(p.y + dy, self._domain_y), *self._snap_y)
            out.append(replace(p, x=x, y=y))
        self._current = tuple(out)
        return self._current

    def commit(self) -> Points:
        """Sorted points; only the dragged ones are clamped into the domains."""
        return sort_points(
            replace(p, x=clamp(p.x, self._domain_x), y=clamp(p.y, self._domain_y))
            if p.id in self._bounds else p
            for p in self._current
        )
