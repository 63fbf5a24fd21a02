from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .plot import MakeId, PlotState

Operation = Callable[["PlotState", "MakeId"], "PlotState"]

operation_registry: dict[str, Operation] = {}


def register_operation(name: str):
    def _decorator(fn: Operation) -> Operation:
        if not name or name in operation_registry:
            raise ValueError(f"Invalid or duplicate operation name '{name}'")
        operation_registry[name] = fn
        return fn
    return _decorator
