from aerocurves.core.math import Domain


class LinearScale:
    """Maps a domain interval onto a pixel interval (and back)."""

    def __init__(self, domain: Domain, pixels: tuple[float, float]):
        self.domain = domain
        self.pixels = pixels

    def __call__(self, v: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.pixels
        if d1 == d0:
            return r0
        return r0 + (v - d0) * (r1 - r0) / (d1 - d0)

    def invert(self, px: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.pixels
        if r1 == r0:
            return d0
        return d0 + (px - r0) * (d1 - d0) / (r1 - r0)


def grid_ticks(domain: Domain, step: float, limit: int = 400) -> list[float]:
    """Multiples of `step` inside the domain; empty when there would be too many."""
    lo, hi = domain
    if step <= 0 or (hi - lo) / step > limit:
        return []
    first = int(lo // step)
    if first * step < lo:
        first += 1
    ticks = []
    k = first
    while k * step <= hi:
        ticks.append(k * step)
        k += 1
    return ticks
