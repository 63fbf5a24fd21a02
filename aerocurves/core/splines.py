import math
from abc import ABC, abstractmethod
from bisect import bisect_right
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from .math import Op, XY

if TYPE_CHECKING:
    from PySide6 import QtGui

Scale = Callable[[float], float]


def _identity(v: float) -> float:
    return v


def _as_xy(p) -> XY:
    if hasattr(p, "x") and hasattr(p, "y"):
        return float(p.x), float(p.y)
    x, y = p
    return float(x), float(y)


def _sign(v: float) -> int:
    return (v > 0) - (v < 0)


def secants(pts: Sequence[XY]) -> list[float]:
    out = []
    for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
        dx = x1 - x0
        out.append((y1 - y0) / dx if dx != 0 else 0.0)
    return out


def monotone_tangents(pts: Sequence[XY]) -> list[float]:
    """
    Per-point tangents that keep each cubic piece inside the values of its two
    end points. Ends take the adjacent secant. Interior points flatten to 0 at
    a local extremum or next to a flat secant; the zero test is exact, so a
    secant of 1e-17 still counts as a slope.
    """
    n = len(pts)
    if n == 0:
        return []
    if n == 1:
        return [0.0]
    m = secants(pts)
    t = [0.0] * n
    t[0] = m[0]
    t[-1] = m[-1]
    for i in range(1, n - 1):
        s0, s1 = m[i - 1], m[i]
        if s0 == 0 or s1 == 0 or _sign(s0) != _sign(s1):
            continue
        h0 = pts[i][0] - pts[i - 1][0]
        h1 = pts[i + 1][0] - pts[i][0]
        p = (s0 * h1 + s1 * h0) / (h0 + h1)
        t[i] = (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))
    return t


def hermite(u: float, h: float, y0: float, y1: float, m0: float, m1: float) -> float:
    u2 = u * u
    u3 = u2 * u
    h00 = 2 * u3 - 3 * u2 + 1
    h10 = u3 - 2 * u2 + u
    h01 = -2 * u3 + 3 * u2
    h11 = u3 - u2
    return h00 * y0 + h10 * h * m0 + h01 * y1 + h11 * h * m1


class Spline(ABC):
    """
    GUI-agnostic curve through a fixed list of control points.
    """

    def __init__(self, points: Iterable):
        self._pts: list[XY] = [_as_xy(p) for p in points]

    @property
    def points(self) -> tuple[XY, ...]:
        return tuple(self._pts)

    def __len__(self) -> int:
        return len(self._pts)

    @abstractmethod
    def evaluate(self, x: float) -> float:
        """Curve value at x."""

    @abstractmethod
    def segments(self, x_scale: Scale = _identity, y_scale: Scale = _identity, /) -> Iterable[tuple[XY, XY, XY]]:
        """
        Yield (c1, c2, p2) for each cubic segment, assuming a moveTo at pts[0].
        """

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    # ---- convenience built on top of `segments` ----------------------------
    def path_ops(self, x_scale: Scale = _identity, y_scale: Scale = _identity, /) -> list[Op]:
        """
        Convert the curve to simple drawing ops:
          - ("M", (x,y))       moveTo; alone, it marks a single point
          - ("C", (c1,c2,p2))  cubicTo
        """
        if not self._pts:
            return []
        x0, y0 = self._pts[0]
        ops: list[Op] = [("M", (x_scale(x0), y_scale(y0)))]
        for c1, c2, p2 in self.segments(x_scale, y_scale):
            ops.append(("C", (c1, c2, p2)))
        return ops

    def to_svg_path(self, x_scale: Scale = _identity, y_scale: Scale = _identity, /) -> str:
        parts = []
        for op, data in self.path_ops(x_scale, y_scale):
            if op == "M":
                parts.append(f"M{data[0]},{data[1]}")
            elif op == "C":
                (ax, ay), (bx, by), (px, py) = data
                parts.append(f"C{ax},{ay} {bx},{by} {px},{py}")
        return "".join(parts)

    def sample(self, n: int = 100) -> list[XY]:
        """n evenly spaced (x, y) pairs across the data range."""
        if not self._pts or n <= 0:
            return []
        lo, hi = self._pts[0][0], self._pts[-1][0]
        if n == 1 or lo == hi:
            return [(lo, self.evaluate(lo))]
        step = (hi - lo) / (n - 1)
        xs = [lo + i * step for i in range(n - 1)] + [hi]
        return [(x, self.evaluate(x)) for x in xs]

    def make_qpath(self, x_scale: Scale = _identity, y_scale: Scale = _identity, /) -> "QtGui.QPainterPath":
        from PySide6 import QtCore, QtGui

        qp = QtGui.QPainterPath()
        qpf = lambda t: QtCore.QPointF(t[0], t[1])

        for op, data in self.path_ops(x_scale, y_scale):
            if op == "M":
                qp.moveTo(qpf(data))
            elif op == "C":
                c1, c2, p2 = data
                qp.cubicTo(qpf(c1), qpf(c2), qpf(p2))
        return qp


class MonotoneSpline(Spline):
    """
    Piecewise cubic Hermite interpolant with shape-preserving tangents.

    Points must already be x-sorted. Outside the data range the curve holds the
    first/last y; it never extrapolates. With no points every value is NaN.
    """

    def __init__(self, points: Iterable):
        super().__init__(points)
        self._xs = [x for x, _ in self._pts]
        self._tangents = monotone_tangents(self._pts)

    @property
    def tangents(self) -> tuple[float, ...]:
        return tuple(self._tangents)

    def evaluate(self, x: float) -> float:
        pts = self._pts
        n = len(pts)
        if n == 0:
            return math.nan
        if x <= pts[0][0]:
            return pts[0][1]
        if x >= pts[-1][0]:
            return pts[-1][1]
        # lo is the last knot with knot.x <= x
        lo = bisect_right(self._xs, x) - 1
        hi = lo + 1
        x0, y0 = pts[lo]
        x1, y1 = pts[hi]
        h = x1 - x0
        if h == 0:
            return y0
        return hermite((x - x0) / h, h, y0, y1, self._tangents[lo], self._tangents[hi])

    def segments(self, x_scale: Scale = _identity, y_scale: Scale = _identity, /):
        pts = self._pts
        if len(pts) < 2:
            return
        kx = x_scale(1.0) - x_scale(0.0)
        ky = y_scale(1.0) - y_scale(0.0)
        ratio = ky / kx if kx != 0 else 0.0
        for i in range(len(pts) - 1):
            (xa, ya), (xb, yb) = pts[i], pts[i + 1]
            m0 = self._tangents[i] * ratio
            m1 = self._tangents[i + 1] * ratio
            x0s, y0s = x_scale(xa), y_scale(ya)
            x1s, y1s = x_scale(xb), y_scale(yb)
            dx = (x1s - x0s) / 3.0
            c1 = (x0s + dx, y0s + dx * m0)
            c2 = (x1s - dx, y1s - dx * m1)
            yield c1, c2, (x1s, y1s)


def build_spline(points: Iterable) -> MonotoneSpline:
    return MonotoneSpline(points)
