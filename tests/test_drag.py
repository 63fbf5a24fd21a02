"""Tests for DragSession.

Covers neighbour clamping, domain clamping, snapping, deltas measured from
the gesture origin, and the re-sort on commit.
"""

from aerocurves.core.drag import DragSession

from conftest import pts, xs, ys

DX = (-10.0, 10.0)
DY = (-1.0, 1.0)


class TestDragSession:
    """Tests for DragSession."""

    def setup_method(self):
        self.points = pts((0, 0), (2, 0), (4, 0), (6, 0))

    def test_empty_selection_is_falsy(self):
        assert not DragSession(self.points, set(), DX, DY)
        assert DragSession(self.points, {"p1"}, DX, DY)

    def test_unselected_points_do_not_move(self):
        session = DragSession(self.points, {"p1"}, DX, DY)
        out = session.move(1.0, 0.5)
        assert xs(out) == [0, 3, 4, 6]
        assert ys(out) == [0, 0.5, 0, 0]

    def test_stops_at_unselected_neighbours(self):
        session = DragSession(self.points, {"p1"}, DX, DY)
        assert xs(session.move(5.0, 0.0)) == [0, 4, 4, 6]
        assert xs(session.move(-5.0, 0.0)) == [0, 0, 4, 6]

    def test_deltas_are_from_origin(self):
        session = DragSession(self.points, {"p1"}, DX, DY)
        session.move(1.0, 0.0)
        out = session.move(1.0, 0.0)
        assert out[1].x == 3

    def test_selected_points_share_fences(self):
        session = DragSession(self.points, {"p1", "p2"}, DX, DY)
        out = session.move(3.0, 0.0)
        # both are held by p3, not by each other
        assert xs(out) == [0, 5, 6, 6]

    def test_domain_clamp(self):
        points = pts((0, 0), (5, 0))
        session = DragSession(points, {"p1"}, (0.0, 5.0), DY)
        out = session.move(3.0, 5.0)
        assert (out[1].x, out[1].y) == (5, 1)

    def test_snap_after_clamp(self):
        session = DragSession(self.points, {"p1"}, DX, DY, snap_x=True, precision_x=1.0,
                              snap_y=True, precision_y=0.5)
        out = session.move(0.4, 0.3)
        assert (out[1].x, out[1].y) == (2, 0.5)
        out = session.move(0.6, -0.2)
        assert (out[1].x, out[1].y) == (3, 0)

    def test_commit_sorts(self):
        points = pts((0, 0), (2, 0), (4, 0), (10, 0))
        session = DragSession(points, {"p1", "p2"}, DX, DY)
        session.move(-2.0, 0.0)
        committed = session.commit()
        assert [p.id for p in committed] == ["p0", "p1", "p2", "p3"]
        assert xs(committed) == [0, 0, 2, 10]

    def test_origin_is_untouched(self):
        session = DragSession(self.points, {"p1"}, DX, DY)
        session.move(1.0, 1.0)
        assert session.origin == self.points
        assert session.dragged_ids == {"p1"}

    def test_single_axis_move_keeps_other_axis(self):
        points = pts((0, 0), (2.3, 0.3), (6, 0))
        session = DragSession(points, {"p1"}, DX, DY, snap_x=True, snap_y=True, precision_y=0.5)
        out = session.move(0.0, 0.4, axes="y")
        assert (out[1].x, out[1].y) == (2.3, 0.5)
        out = session.move(1.0, 0.0, axes="x")
        assert (out[1].x, out[1].y) == (3, 0.3)

    def test_commit_clamps_only_dragged_points(self):
        # p0 sits outside a domain that was shrunk after it was placed
        points = pts((-8, 0), (2, 0), (4, 0))
        session = DragSession(points, {"p1"}, (-5.0, 5.0), DY)
        session.move(1.0, 0.0)
        committed = session.commit()
        assert xs(committed) == [-8, 3, 4]
