from .math import Point, XY, Domain, Op, clamp, snap, parse_number
from .ids import counter_ids, uuid_ids
from .geometry import (
    MIN_POINTS, sort_points, insert_point, remove_point, delete_selection,
    flip_x, flip_y, trim, trim_left, trim_right, mirror, duplicate,
    replace_selection_with_points, select_range, selection_center,
)
from .drag import DragSession
from .splines import Spline, MonotoneSpline, build_spline
from .clipboard import serialize_points, parse_points
from .plot import Background, PlotState, create_plot, duplicate_plot
from .workspace import Workspace
from .history import History
from .registries import operation_registry, register_operation
from .editor import CurveEditor
