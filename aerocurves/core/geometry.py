"""
Selection-aware transforms over an x-ordered point set.

Every function here is pure: inputs are never mutated, results come back
x-sorted, and a selection that is too small for an operation turns the call
into a no-op that hands the input back unchanged.

Mirror and duplicate work on the contiguous index span running from the first
to the last selected point, so unselected points lying between two selected
ones travel with them.
"""
from typing import Callable, Collection, Iterable, Literal, Sequence

from .math import Domain, Point, PointId, XY, clamp, snap, span

Direction = Literal["left", "right"]
Points = tuple[Point, ...]
Selection = frozenset[PointId]

MIN_POINTS = 2
DIRECTIONS = ("left", "right")


def sort_points(points: Iterable[Point]) -> Points:
    # stable: equal x keeps arrival order
    return tuple(sorted(points, key=lambda p: p.x))


def live_selection(points: Sequence[Point], selection: Collection[PointId]) -> Selection:
    ids = frozenset(selection)
    return frozenset(p.id for p in points if p.id in ids)


def selected_points(points: Sequence[Point], selection: Collection[PointId]) -> list[Point]:
    ids = frozenset(selection)
    return [p for p in points if p.id in ids]


def selection_center(points: Sequence[Point], selection: Collection[PointId]) -> XY | None:
    """
    Position of a lone selected point, or the middle of the selection's
    bounding box. None when nothing live is selected.
    """
    chosen = selected_points(points, selection)
    if not chosen:
        return None
    if len(chosen) == 1:
        return chosen[0].to_xy()
    lo_x, hi_x = span(p.x for p in chosen)
    lo_y, hi_y = span(p.y for p in chosen)
    return (lo_x + hi_x) / 2.0, (lo_y + hi_y) / 2.0


def _check_direction(direction: str) -> None:
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be 'left' or 'right', got {direction!r}")


def _selected_index_span(ordered: Points, ids: Selection) -> tuple[int, int] | None:
    idx = [i for i, p in enumerate(ordered) if p.id in ids]
    if not idx:
        return None
    return idx[0], idx[-1]


def _place(x: float, y: float, domain_x: Domain | None, domain_y: Domain | None) -> XY:
    if domain_x is not None:
        x = clamp(x, domain_x)
    if domain_y is not None:
        y = clamp(y, domain_y)
    return x, y


def _claim(ordered: Points, copies: list[Point], anchor: Point,
           direction: Direction, protected: set[PointId]) -> list[Point]:
    """
    Drop the points sitting in the span the copies now occupy on the anchor's
    side. The anchor itself and the source span are never dropped.
    """
    lo, hi = span(c.x for c in copies)
    kept: list[Point] = []
    for p in ordered:
        if p.id in protected:
            kept.append(p)
        elif direction == "right" and anchor.x < p.x <= hi:
            continue
        elif direction == "left" and lo <= p.x < anchor.x:
            continue
        else:
            kept.append(p)
    return kept


# ---- insertion / removal ----------------------------------------------------

def insert_point(points: Sequence[Point], point: Point) -> Points:
    return sort_points((*points, point))


def remove_point(points: Sequence[Point], point_id: PointId) -> Sequence[Point]:
    remaining = [p for p in points if p.id != point_id]
    if len(remaining) == len(points) or len(remaining) < MIN_POINTS:
        return points
    return sort_points(remaining)


def delete_selection(points: Sequence[Point], selection: Collection[PointId]) -> Sequence[Point]:
    ids = frozenset(selection)
    remaining = [p for p in points if p.id not in ids]
    if len(remaining) == len(points) or len(remaining) < MIN_POINTS:
        return points
    return sort_points(remaining)


# ---- flips ------------------------------------------------------------------

def flip_y(points: Sequence[Point], selection: Collection[PointId], domain_y: Domain,
           snap_enabled: bool = False, precision: float = 1.0) -> Points:
    ids = frozenset(selection)
    out = []
    for p in points:
        if p.id in ids:
            p = Point(p.id, p.x, clamp(snap(-p.y, snap_enabled, precision), domain_y))
        out.append(p)
    return sort_points(out)


def flip_x(points: Sequence[Point], selection: Collection[PointId], domain_x: Domain,
           snap_enabled: bool = False, precision: float = 1.0) -> Sequence[Point]:
    """Mirror the selected x values inside the selection's own span."""
    ids = frozenset(selection)
    bounds = span(p.x for p in points if p.id in ids)
    if bounds is None:
        return points
    lo, hi = bounds
    out = []
    for p in points:
        if p.id in ids:
            x = clamp(snap(hi - (p.x - lo), snap_enabled, precision), domain_x)
            p = Point(p.id, x, p.y)
        out.append(p)
    return sort_points(out)


# ---- trims ------------------------------------------------------------------

def trim(points: Sequence[Point], selection: Collection[PointId]) -> Sequence[Point]:
    """Keep the spatial window [min selected x, max selected x]."""
    chosen = selected_points(points, selection)
    if len(chosen) < 2:
        return points
    lo, hi = span(p.x for p in chosen)
    kept = [p for p in points if lo <= p.x <= hi]
    if len(kept) < MIN_POINTS or len(kept) == len(points):
        return points
    return sort_points(kept)


def trim_left(points: Sequence[Point], selection: Collection[PointId]) -> Sequence[Point]:
    chosen = selected_points(points, selection)
    if not chosen:
        return points
    lo = min(p.x for p in chosen)
    kept = [p for p in points if p.x >= lo]
    if len(kept) < MIN_POINTS or len(kept) == len(points):
        return points
    return sort_points(kept)


def trim_right(points: Sequence[Point], selection: Collection[PointId]) -> Sequence[Point]:
    chosen = selected_points(points, selection)
    if not chosen:
        return points
    hi = max(p.x for p in chosen)
    kept = [p for p in points if p.x <= hi]
    if len(kept) < MIN_POINTS or len(kept) == len(points):
        return points
    return sort_points(kept)


# ---- mirror / duplicate -----------------------------------------------------

def mirror(points: Sequence[Point], selection: Collection[PointId], direction: Direction,
           make_id: Callable[[], PointId], domain_x: Domain | None = None,
           domain_y: Domain | None = None) -> tuple[Sequence[Point], Selection]:
    """
    Reflect the selected span across its edge point (the anchor).

    "right" anchors on the max-x point and writes the reflection to its right,
    "left" anchors on the min-x point. The anchor is kept as-is and stays
    selected together with the new points.
    """
    _check_direction(direction)
    ids = frozenset(selection)
    ordered = sort_points(points)
    bounds = _selected_index_span(ordered, ids)
    if bounds is None or bounds[0] == bounds[1]:
        return points, ids

    first, last = bounds
    source = ordered[first:last + 1]
    if direction == "right":
        anchor, others = source[-1], source[:-1]
    else:
        anchor, others = source[0], source[1:]

    targets = [_place(2.0 * anchor.x - p.x, p.y, domain_x, domain_y) for p in others]
    copies = [Point(make_id(), x, y) for x, y in targets if x != anchor.x]
    if not copies:
        return points, ids

    kept = _claim(ordered, copies, anchor, direction, {p.id for p in source})
    return sort_points(kept + copies), frozenset([anchor.id, *(c.id for c in copies)])


def duplicate(points: Sequence[Point], selection: Collection[PointId], direction: Direction,
              make_id: Callable[[], PointId], domain_x: Domain | None = None,
              domain_y: Domain | None = None) -> tuple[Sequence[Point], Selection]:
    """
    Copy the selected span once, shifted by its own width, next to itself.

    Copies landing on the anchor's x are dropped, so a single selected point
    (width 0) duplicates to nothing. The copies become the new selection.
    """
    _check_direction(direction)
    ids = frozenset(selection)
    ordered = sort_points(points)
    bounds = _selected_index_span(ordered, ids)
    if bounds is None:
        return points, ids

    first, last = bounds
    source = ordered[first:last + 1]
    width = source[-1].x - source[0].x
    if direction == "right":
        anchor, offset = source[-1], width
    else:
        anchor, offset = source[0], -width

    targets = [_place(p.x + offset, p.y, domain_x, domain_y) for p in source]
    copies = [Point(make_id(), x, y) for x, y in targets if x != anchor.x]
    if not copies:
        return points, ids

    kept = _claim(ordered, copies, anchor, direction, {p.id for p in source})
    return sort_points(kept + copies), frozenset(c.id for c in copies)


# ---- paste ------------------------------------------------------------------

def replace_selection_with_points(points: Sequence[Point], selection: Collection[PointId],
                                  incoming: Sequence[XY], domain_x: Domain, domain_y: Domain,
                                  make_id: Callable[[], PointId]) -> tuple[Sequence[Point], Selection]:
    """
    Paste `incoming` (x, y) pairs so that their leftmost x lands on the leftmost
    selected point. Existing points under the pasted span are replaced.
    """
    ids = frozenset(selection)
    chosen = selected_points(points, ids)
    if not incoming or not chosen:
        return points, ids

    pairs = [(float(x), float(y)) for x, y in incoming]
    anchor_x = min(p.x for p in chosen)
    in_lo, in_hi = span(x for x, _ in pairs)
    shift = anchor_x - in_lo
    end_x = anchor_x + (in_hi - in_lo)

    pasted = [Point(make_id(), clamp(x + shift, domain_x), clamp(y, domain_y)) for x, y in pairs]
    kept = [p for p in points if not (anchor_x <= p.x <= end_x)]
    result = sort_points(kept + pasted)
    if len(result) < MIN_POINTS:
        return points, ids
    return result, frozenset(p.id for p in pasted)


# ---- range selection --------------------------------------------------------

def select_range(points: Sequence[Point], x0: float, x1: float,
                 selection: Collection[PointId] = (), additive: bool = False) -> Selection:
    lo, hi = min(x0, x1), max(x0, x1)
    hits = {p.id for p in points if lo <= p.x <= hi}
    if additive:
        hits |= live_selection(points, selection)
    return frozenset(hits)
