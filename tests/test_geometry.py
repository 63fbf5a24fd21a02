"""Tests for the selection-aware transforms in aerocurves.core.geometry.

Covers ordering, the two-point floor on removals and trims, both flips,
mirror/duplicate in each direction (anchor rules, claimed span, domain
clamping), paste-replace, range selection and the selection center.
"""

import pytest

from aerocurves.core import counter_ids
from aerocurves.core.geometry import (
    delete_selection, duplicate, flip_x, flip_y, insert_point, mirror, remove_point,
    replace_selection_with_points, select_range, selection_center, sort_points,
    trim, trim_left, trim_right,
)
from aerocurves.core.math import Point

from conftest import pts, xs, ys

DOMAIN = (-180.0, 180.0)


def is_sorted(points):
    return all(a.x <= b.x for a, b in zip(points, points[1:]))


class TestInsertRemove:
    """Tests for insert_point(), remove_point() and delete_selection()."""

    def test_insert_keeps_order(self):
        points = pts((0, 0), (5, 0))
        out = insert_point(points, Point("n", 2.0, 1.0))
        assert xs(out) == [0, 2, 5]

    def test_insert_tie_goes_after_existing(self):
        points = pts((0, 0), (2, 0), (5, 0))
        out = insert_point(points, Point("n", 2.0, 9.0))
        assert [p.id for p in out] == ["p0", "p1", "n", "p2"]

    def test_remove(self):
        points = pts((0, 0), (1, 1), (2, 2))
        assert xs(remove_point(points, "p1")) == [0, 2]

    def test_remove_absent_is_noop(self):
        points = pts((0, 0), (1, 1), (2, 2))
        assert remove_point(points, "zz") is points

    def test_remove_keeps_two_points(self):
        points = pts((0, 0), (1, 1))
        assert remove_point(points, "p0") is points

    def test_delete_selection(self):
        points = pts((0, 0), (1, 1), (2, 2), (3, 3))
        assert xs(delete_selection(points, {"p1", "p2"})) == [0, 3]

    def test_delete_selection_keeps_two_points(self):
        points = pts((0, 0), (1, 1), (2, 2))
        assert delete_selection(points, {"p0", "p1"}) is points


class TestFlips:
    """Tests for flip_y() and flip_x()."""

    def test_flip_y_middle_point(self):
        points = pts((-10, 1), (0, 2), (10, 1))
        out = flip_y(points, {"p1"}, (-5.0, 5.0))
        assert ys(out) == [1, -2, 1]

    def test_flip_y_clamps(self):
        points = pts((0, 3), (1, 0))
        out = flip_y(points, {"p0"}, (-1.0, 5.0))
        assert ys(out) == [-1, 0]

    def test_flip_y_snaps(self):
        points = pts((0, 0.3), (1, 0))
        out = flip_y(points, {"p0"}, (-1.0, 1.0), True, 0.5)
        assert ys(out) == [-0.5, 0]

    def test_flip_y_twice_is_identity(self):
        points = pts((0, 0.25), (1, -0.75), (2, 0.5))
        sel = {"p0", "p2"}
        twice = flip_y(flip_y(points, sel, (-1.0, 1.0)), sel, (-1.0, 1.0))
        assert ys(twice) == pytest.approx(ys(points))

    def test_flip_x_reverses_selection_span(self):
        points = pts((0, 0), (1, 1), (3, 2), (4, 9))
        out = flip_x(points, {"p0", "p1", "p2"}, DOMAIN)
        assert xs(out) == [0, 2, 3, 4]
        assert ys(out) == [2, 1, 0, 9]
        assert [p.id for p in out] == ["p2", "p1", "p0", "p3"]

    def test_flip_x_empty_selection(self):
        points = pts((0, 0), (1, 1))
        assert flip_x(points, set(), DOMAIN) is points


class TestTrim:
    """Tests for trim(), trim_left() and trim_right()."""

    def setup_method(self):
        self.points = pts((0, 0), (2, 0), (5, 0), (8, 0), (10, 0))

    def test_trim_is_a_spatial_window(self):
        assert xs(trim(self.points, {"p1", "p3"})) == [2, 5, 8]

    def test_trim_needs_two_selected(self):
        assert trim(self.points, {"p2"}) is self.points

    def test_trim_left(self):
        assert xs(trim_left(self.points, {"p2"})) == [5, 8, 10]

    def test_trim_right(self):
        assert xs(trim_right(self.points, {"p2"})) == [0, 2, 5]

    def test_trim_left_keeps_two_points(self):
        assert trim_left(self.points, {"p4"}) is self.points

    def test_trim_right_keeps_two_points(self):
        assert trim_right(self.points, {"p0"}) is self.points

    def test_trim_empty_selection(self):
        assert trim_left(self.points, set()) is self.points


class TestMirror:
    """Tests for mirror()."""

    def test_mirror_right(self):
        points = pts((0, 0), (1, 1), (2, 2), (5, 9))
        out, sel = mirror(points, {"p0", "p1", "p2"}, "right", counter_ids("t"))
        assert xs(out) == [0, 1, 2, 3, 4, 5]
        assert ys(out) == [0, 1, 2, 1, 0, 9]
        assert sel == {"p2", "t_1", "t_2"}

    def test_mirror_creates_k_minus_one_reflections(self):
        points = pts((0, 0), (1, 1), (2, 2), (5, 9))
        out, sel = mirror(points, {"p0", "p1", "p2"}, "right", counter_ids("t"))
        new = [p for p in out if p.id.startswith("t_")]
        assert len(new) == 2
        assert sorted(p.x for p in new) == [2 * 2 - 1, 2 * 2 - 0]

    def test_mirror_claims_span(self):
        points = pts((0, 0), (1, 1), (2, 2), (3, 7))
        out, _ = mirror(points, {"p1", "p2"}, "right", counter_ids("t"))
        assert xs(out) == [0, 1, 2, 3]
        assert ys(out) == [0, 1, 2, 1]
        assert "p3" not in {p.id for p in out}

    def test_mirror_left(self):
        points = pts((0, 5), (2, 0), (3, 1))
        out, sel = mirror(points, {"p1", "p2"}, "left", counter_ids("t"))
        assert xs(out) == [0, 1, 2, 3]
        assert ys(out) == [5, 1, 0, 1]
        assert sel == {"p1", "t_1"}

    def test_mirror_clamps_into_domain(self):
        points = pts((-170, 0), (170, 1), (180, 0.5))
        out, _ = mirror(points, {"p0", "p1"}, "right", counter_ids("t"), DOMAIN, (-1.0, 1.0))
        assert xs(out) == [-170, 170, 180]
        assert ys(out) == [0, 1, 0]
        assert all(DOMAIN[0] <= p.x <= DOMAIN[1] for p in out)

    def test_mirror_needs_two_selected(self):
        points = pts((0, 0), (1, 1))
        out, sel = mirror(points, {"p0"}, "right", counter_ids("t"))
        assert out is points
        assert sel == {"p0"}

    def test_bad_direction(self):
        with pytest.raises(ValueError):
            mirror(pts((0, 0), (1, 1)), {"p0", "p1"}, "up", counter_ids("t"))


class TestDuplicate:
    """Tests for duplicate()."""

    def test_duplicate_right_drops_copy_on_anchor(self):
        points = pts((0, 0), (10, 5))
        out, sel = duplicate(points, {"p0", "p1"}, "right", counter_ids("t"))
        assert xs(out) == [0, 10, 20]
        assert ys(out) == [0, 5, 5]
        assert sel == {"t_1"}
        assert out[2].id == "t_1"

    def test_duplicate_left_claims_span(self):
        points = pts((0, 0), (10, 5), (20, 1))
        out, sel = duplicate(points, {"p1", "p2"}, "left", counter_ids("t"))
        assert xs(out) == [0, 10, 20]
        assert ys(out) == [5, 5, 1]
        assert [p.id for p in out] == ["t_1", "p1", "p2"]
        assert sel == {"t_1"}

    def test_duplicate_carries_unselected_points_in_span(self):
        points = pts((0, 0), (1, 3), (2, 0), (10, 0))
        out, sel = duplicate(points, {"p0", "p2"}, "right", counter_ids("t"))
        assert xs(out) == [0, 1, 2, 3, 4, 10]
        assert ys(out) == [0, 3, 0, 3, 0, 0]
        assert len(sel) == 2

    def test_single_point_is_noop(self):
        points = pts((0, 0), (10, 5))
        out, _ = duplicate(points, {"p1"}, "right", counter_ids("t"))
        assert out is points

    def test_empty_selection_is_noop(self):
        points = pts((0, 0), (10, 5))
        out, sel = duplicate(points, set(), "left", counter_ids("t"))
        assert out is points
        assert sel == frozenset()

    def test_duplicate_clamps_into_domain(self):
        points = pts((100, 0), (170, 1))
        out, _ = duplicate(points, {"p0", "p1"}, "right", counter_ids("t"), DOMAIN, (-1.0, 1.0))
        assert xs(out) == [100, 170, 180]


class TestPaste:
    """Tests for replace_selection_with_points()."""

    def setup_method(self):
        self.points = pts((0, 0), (1, 1), (2, 2), (3, 3), (4, 4))

    def test_paste_replaces_span(self):
        out, sel = replace_selection_with_points(
            self.points, {"p1"}, [(10, 5), (12, 7)], (-10.0, 10.0), (-1.0, 6.0), counter_ids("t"))
        assert xs(out) == [0, 1, 3, 4]
        assert ys(out) == [0, 5, 6, 4]
        assert sel == {"t_1", "t_2"}

    def test_anchor_is_leftmost_selected(self):
        out, _ = replace_selection_with_points(
            self.points, {"p3", "p2"}, [(0, 9)], (-10.0, 10.0), (-10.0, 10.0), counter_ids("t"))
        assert xs(out) == [0, 1, 2, 3, 4]
        assert ys(out) == [0, 1, 9, 3, 4]

    def test_no_selection_is_noop(self):
        out, _ = replace_selection_with_points(
            self.points, set(), [(0, 0)], DOMAIN, DOMAIN, counter_ids("t"))
        assert out is self.points

    def test_nothing_incoming_is_noop(self):
        out, _ = replace_selection_with_points(
            self.points, {"p0"}, [], DOMAIN, DOMAIN, counter_ids("t"))
        assert out is self.points

    def test_result_under_two_points_is_noop(self):
        points = pts((0, 0), (0, 1))
        out, sel = replace_selection_with_points(
            points, {"p0"}, [(3, 3)], DOMAIN, DOMAIN, counter_ids("t"))
        assert out is points
        assert sel == {"p0"}


class TestSelection:
    """Tests for select_range() and selection_center()."""

    def setup_method(self):
        self.points = pts((0, 0), (2, 4), (5, 1), (8, -2), (10, 0))

    def test_select_range_any_order(self):
        assert select_range(self.points, 6, 1) == {"p1", "p2"}

    def test_select_range_additive(self):
        sel = select_range(self.points, 1, 6, {"p4", "gone"}, additive=True)
        assert sel == {"p1", "p2", "p4"}

    def test_select_range_replaces(self):
        assert select_range(self.points, 9, 11, {"p0"}) == {"p4"}

    def test_center_single(self):
        assert selection_center(self.points, {"p2"}) == (5, 1)

    def test_center_bounding_box(self):
        assert selection_center(self.points, {"p1", "p3"}) == (5.0, 1.0)

    def test_center_empty(self):
        assert selection_center(self.points, {"gone"}) is None


class TestOrdering:
    """Every transform hands back x-sorted points."""

    def test_chain_stays_sorted(self):
        make_id = counter_ids("t")
        points = sort_points(pts((4, 0), (0, 1), (2, -1), (6, 0.5), (9, 0)))
        points = flip_x(points, {"p0", "p2", "p3"}, DOMAIN)
        assert is_sorted(points)
        points, sel = mirror(points, {"p2", "p0"}, "right", make_id, DOMAIN, (-1.0, 1.0))
        assert is_sorted(points)
        points, sel = duplicate(points, sel, "left", make_id, DOMAIN, (-1.0, 1.0))
        assert is_sorted(points)
        points, sel = replace_selection_with_points(
            points, sel, [(0, 0), (1, 1)], DOMAIN, (-1.0, 1.0), make_id)
        assert is_sorted(points)
        points = trim_right(points, sel)
        assert is_sorted(points)
