"""Tests for the scalar helpers in aerocurves.core.math.

Covers snapping (enabled flag, bad precision, half rounding, idempotence),
clamping and the text-field number parser.
"""

import math

import pytest

from aerocurves.core.math import clamp, is_finite_number, parse_number, snap, span


class TestSnap:
    """Tests for snap()."""

    def test_rounds_to_nearest_step(self):
        assert snap(2.3, True, 0.5) == 2.5

    def test_disabled_returns_value(self):
        assert snap(2.3, False, 0.5) == 2.3

    @pytest.mark.parametrize("precision", [0, -1.0, math.nan, math.inf])
    def test_bad_precision_returns_value(self, precision):
        assert snap(2.3, True, precision) == 2.3

    def test_halves_round_up(self):
        assert snap(0.25, True, 0.5) == 0.5
        assert snap(-0.25, True, 0.5) == 0.0
        assert snap(2.5, True, 1.0) == 3.0

    @pytest.mark.parametrize("value", [-7.3, -0.5, 0.0, 1.1, 2.75, 179.9])
    @pytest.mark.parametrize("precision", [0.1, 0.5, 1.0, 15.0])
    def test_idempotent(self, value, precision):
        once = snap(value, True, precision)
        assert snap(once, True, precision) == once


class TestClamp:
    """Tests for clamp()."""

    def test_inside(self):
        assert clamp(0.5, (0.0, 1.0)) == 0.5

    def test_below_and_above(self):
        assert clamp(-3.0, (-1.0, 1.0)) == -1.0
        assert clamp(3.0, (-1.0, 1.0)) == 1.0

    def test_bounds_are_inclusive(self):
        assert clamp(1.0, (-1.0, 1.0)) == 1.0
        assert clamp(-1.0, (-1.0, 1.0)) == -1.0


class TestParseNumber:
    """Tests for parse_number()."""

    def test_valid(self):
        assert parse_number("2.5") == 2.5
        assert parse_number("  -3 ") == -3.0
        assert parse_number(4) == 4.0

    @pytest.mark.parametrize("text", ["", "abc", "1,5", None, "nan", "inf", "-Infinity"])
    def test_rejected(self, text):
        assert parse_number(text) is None


class TestHelpers:
    """Tests for is_finite_number() and span()."""

    def test_is_finite_number(self):
        assert is_finite_number(1)
        assert is_finite_number(-2.5)
        assert not is_finite_number(True)
        assert not is_finite_number("1")
        assert not is_finite_number(math.nan)
        assert not is_finite_number(None)

    def test_span(self):
        assert span([3.0, -1.0, 2.0]) == (-1.0, 3.0)
        assert span([]) is None
