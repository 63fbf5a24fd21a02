import logging
from copy import deepcopy
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

HISTORY_LIMIT = 100


class History(Generic[T]):
    """
    Undo/redo around a value that is replaced wholesale.

    Two ways to change the state:
      - apply(state): a committed change, recorded as exactly one undo step.
      - apply_transient(state): a live update (e.g. while dragging). The state
        before the first transient is remembered; commit() records it as one
        undo step, however many transients came in between.
    Snapshots are deep copies, so nothing on the stacks is shared with the
    live state.
    """

    def __init__(self, initial: T, limit: int = HISTORY_LIMIT):
        self._state = initial
        self._limit = max(1, int(limit))
        self._past: list[T] = []
        self._future: list[T] = []
        self._base: T | None = None

    @property
    def state(self) -> T:
        return self._state

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def in_transient(self) -> bool:
        return self._base is not None

    def __len__(self) -> int:
        return len(self._past)

    def _record(self, previous: T) -> None:
        self._past.append(previous)
        if len(self._past) > self._limit:
            del self._past[:len(self._past) - self._limit]
        self._future.clear()
        logger.debug("History push (%d undo steps)", len(self._past))

    def apply(self, state: T) -> T:
        snapshot = self._base if self._base is not None else deepcopy(self._state)
        self._base = None
        self._state = state
        self._record(snapshot)
        return state

    def apply_transient(self, state: T) -> T:
        if self._base is None:
            self._base = deepcopy(self._state)
        self._state = state
        return state

    def commit(self, state: T | None = None) -> T:
        """Close a run of transient updates as one undo step."""
        if self._base is None:
            if state is not None:
                return self.apply(state)
            return self._state
        if state is not None:
            self._state = state
        self._record(self._base)
        self._base = None
        return self._state

    def discard_transient(self) -> T:
        """Drop the live updates and go back to where they started."""
        if self._base is not None:
            self._state = self._base
            self._base = None
        return self._state

    def replace(self, state: T) -> T:
        """Swap the state without touching the stacks."""
        self._state = state
        return state

    def undo(self) -> T:
        if not self._past:
            return self._state
        self._base = None
        self._future.append(deepcopy(self._state))
        self._state = self._past.pop()
        return self._state

    def redo(self) -> T:
        if not self._future:
            return self._state
        self._base = None
        self._past.append(deepcopy(self._state))
        self._state = self._future.pop()
        return self._state

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
        self._base = None
