import math
from dataclasses import dataclass
from typing import Literal

XY = tuple[float, float]
Domain = tuple[float, float]
Op = tuple[Literal["M", "L", "C", "Z"], tuple]
PointId = str


@dataclass(frozen=True)
class Point:
    """
    A control point owned by a plot.
      - id: opaque, process-unique token; survives reordering
      - x, y: domain-space coordinates
    """
    id: PointId
    x: float
    y: float

    def to_xy(self) -> XY:
        return self.x, self.y


def is_finite_number(value) -> bool:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def snap(value: float, enabled: bool, precision: float) -> float:
    """
    Quantize `value` to the nearest multiple of `precision`.

    Disabled snapping, or a precision that is not a positive finite number,
    returns the value unchanged. Halves round up, so snap(-0.25, True, 0.5)
    is 0.0 rather than -0.5.
    """
    if not enabled:
        return value
    if not is_finite_number(precision) or precision <= 0:
        return value
    return math.floor(value / precision + 0.5) * precision


def clamp(value: float, domain: Domain) -> float:
    lo, hi = domain
    return max(lo, min(hi, value))


def parse_number(text) -> float | None:
    """
    Boundary parser for text fields. Returns None for anything that does not
    parse to a finite float, in which case no transition should run.
    """
    if text is None:
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def span(values) -> tuple[float, float] | None:
    values = list(values)
    if not values:
        return None
    return min(values), max(values)
