"""Toolbar actions, registered by the name the editor and shortcuts use."""
from . import plot as P
from .plot import MakeId, PlotState
from .registries import register_operation


@register_operation("flip-vertical")
def flip_vertical(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.flip_vertical(plot)


@register_operation("flip-horizontal")
def flip_horizontal(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.flip_horizontal(plot)


@register_operation("trim")
def trim(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.trim(plot)


@register_operation("trim-left")
def trim_left(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.trim_left(plot)


@register_operation("trim-right")
def trim_right(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.trim_right(plot)


@register_operation("mirror-left")
def mirror_left(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.mirror(plot, "left", make_id)


@register_operation("mirror-right")
def mirror_right(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.mirror(plot, "right", make_id)


@register_operation("duplicate-left")
def duplicate_left(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.duplicate(plot, "left", make_id)


@register_operation("duplicate-right")
def duplicate_right(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.duplicate(plot, "right", make_id)


@register_operation("delete-selection")
def delete_selection(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.delete_selection(plot)


@register_operation("normalize")
def normalize(plot: PlotState, make_id: MakeId) -> PlotState:
    return P.normalize_to_domain(plot, make_id)
