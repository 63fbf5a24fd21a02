"""Shared fixtures for the core tests."""

import pytest

from aerocurves.core import Point, counter_ids


@pytest.fixture
def make_id():
    """Deterministic id factory, fresh per test."""
    return counter_ids("t")


def pts(*pairs, prefix="p"):
    """Points with ids p0, p1, ... in argument order."""
    return tuple(Point(f"{prefix}{i}", float(x), float(y)) for i, (x, y) in enumerate(pairs))


def xs(points):
    return [p.x for p in points]


def ys(points):
    return [p.y for p in points]
