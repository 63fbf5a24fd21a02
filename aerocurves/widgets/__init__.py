from .plot_widget import PlotWidget
from .plot_selector import PlotSwitchWidget
from .side_panel import SidePanel
from .toolbar import OperationBar
from .window import EditorWindow

__all__ = [
    "EditorWindow",
    "OperationBar",
    "PlotSwitchWidget",
    "PlotWidget",
    "SidePanel",
]
