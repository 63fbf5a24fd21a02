import logging
from dataclasses import dataclass, replace

from .plot import MakeId, PlotState, create_plot, duplicate_plot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """
    The set of open plots and which one is being edited.

    Frozen like the plots it holds; every edit returns a new workspace, which
    is what the undo history snapshots.
    """
    plots: tuple[PlotState, ...] = ()
    active_id: str | None = None

    @classmethod
    def initial(cls, make_id: MakeId) -> "Workspace":
        first = create_plot("curve_1", make_id)
        return cls(plots=(first,), active_id=first.id)

    # ---- lookups -------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.plots)

    def __iter__(self):
        return iter(self.plots)

    def __getitem__(self, key: int | str) -> PlotState:
        if isinstance(key, int):
            if 0 <= key < len(self.plots):
                return self.plots[key]
            raise IndexError(key)
        if isinstance(key, str):
            for plot in self.plots:
                if plot.id == key:
                    return plot
            for plot in self.plots:
                if plot.name == key:
                    return plot
            raise KeyError(key)
        raise TypeError("key must be int or str")

    def index_of(self, plot_id: str) -> int:
        for i, plot in enumerate(self.plots):
            if plot.id == plot_id:
                return i
        raise KeyError(plot_id)

    @property
    def active_plot(self) -> PlotState | None:
        if self.active_id is None:
            return None
        for plot in self.plots:
            if plot.id == self.active_id:
                return plot
        return None

    # ---- transitions ---------------------------------------------------------
    def add_plot(self, make_id: MakeId, name: str | None = None) -> "Workspace":
        plot = create_plot(name or f"curve_{len(self.plots) + 1}", make_id)
        logger.debug("Adding plot %s (%s)", plot.id, plot.name)
        return replace(self, plots=(*self.plots, plot), active_id=plot.id)

    def remove_plot(self, plot_id: str) -> "Workspace":
        remaining = tuple(p for p in self.plots if p.id != plot_id)
        if len(remaining) == len(self.plots):
            raise KeyError(plot_id)
        active = self.active_id
        if active == plot_id:
            active = remaining[0].id if remaining else None
        logger.debug("Removed plot %s, active is now %s", plot_id, active)
        return replace(self, plots=remaining, active_id=active)

    def replace_plot(self, plot: PlotState) -> "Workspace":
        idx = self.index_of(plot.id)
        if self.plots[idx] is plot:
            return self
        plots = list(self.plots)
        plots[idx] = plot
        return replace(self, plots=tuple(plots))

    def set_active(self, plot_id: str | None) -> "Workspace":
        if plot_id is not None:
            self.index_of(plot_id)
        return replace(self, active_id=plot_id)

    def duplicate_plot(self, plot_id: str, make_id: MakeId) -> "Workspace":
        idx = self.index_of(plot_id)
        copy = duplicate_plot(self.plots[idx], make_id)
        plots = (*self.plots[:idx + 1], copy, *self.plots[idx + 1:])
        return replace(self, plots=plots, active_id=copy.id)

    def to_dict(self) -> dict:
        return {
            "active_id": self.active_id,
            "plots": [p.to_dict() for p in self.plots],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workspace":
        return cls(
            plots=tuple(PlotState.from_dict(p) for p in data.get("plots", [])),
            active_id=data.get("active_id"),
        )
