"""Tests for Workspace: lookups, plot lifecycle and serialization."""

from dataclasses import replace

import pytest

from aerocurves.core import Workspace, counter_ids


@pytest.fixture
def ws(make_id):
    ws = Workspace.initial(make_id)
    return ws.add_plot(make_id)


class TestLookups:
    """Tests for __getitem__, index_of and active_plot."""

    def test_initial(self, make_id):
        ws = Workspace.initial(make_id)
        assert len(ws) == 1
        assert ws.active_plot.name == "curve_1"

    def test_by_index_id_and_name(self, ws):
        second = ws.plots[1]
        assert ws[1] is second
        assert ws[second.id] is second
        assert ws["curve_2"] is second

    def test_bad_index(self, ws):
        with pytest.raises(IndexError):
            ws[5]

    def test_unknown_key(self, ws):
        with pytest.raises(KeyError):
            ws["nope"]

    def test_bad_key_type(self, ws):
        with pytest.raises(TypeError):
            ws[1.5]

    def test_index_of(self, ws):
        assert ws.index_of(ws.plots[1].id) == 1
        with pytest.raises(KeyError):
            ws.index_of("nope")

    def test_iter(self, ws):
        assert [p.name for p in ws] == ["curve_1", "curve_2"]


class TestLifecycle:
    """Tests for add, remove, duplicate and set_active."""

    def test_add_plot_becomes_active(self, ws):
        assert ws.active_plot is ws.plots[1]
        assert ws.active_plot.name == "curve_2"

    def test_remove_active_falls_back_to_first(self, ws):
        out = ws.remove_plot(ws.plots[1].id)
        assert len(out) == 1
        assert out.active_id == ws.plots[0].id

    def test_remove_last_plot(self, make_id):
        ws = Workspace.initial(make_id)
        out = ws.remove_plot(ws.active_id)
        assert len(out) == 0
        assert out.active_plot is None

    def test_remove_unknown(self, ws):
        with pytest.raises(KeyError):
            ws.remove_plot("nope")

    def test_duplicate_is_inserted_after_source(self, ws, make_id):
        source = ws.plots[0]
        out = ws.duplicate_plot(source.id, make_id)
        assert [p.name for p in out] == ["curve_1", "curve_1 copy", "curve_2"]
        assert out.active_id == out.plots[1].id

    def test_set_active(self, ws):
        first = ws.plots[0].id
        assert ws.set_active(first).active_id == first
        assert ws.set_active(None).active_plot is None
        with pytest.raises(KeyError):
            ws.set_active("nope")

    def test_replace_plot(self, ws):
        renamed = replace(ws.plots[0], name="wing")
        out = ws.replace_plot(renamed)
        assert out[0].name == "wing"
        assert ws.replace_plot(ws.plots[0]) is ws

    def test_plots_do_not_share_ids(self, ws):
        ids = [p.id for plot in ws for p in plot.points]
        assert len(set(ids)) == len(ids)


class TestSerialization:
    """Tests for to_dict() and from_dict()."""

    def test_round_trip(self):
        ws = Workspace.initial(counter_ids("s"))
        assert Workspace.from_dict(ws.to_dict()) == ws
