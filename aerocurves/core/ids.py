import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def counter_ids(prefix: str = "p") -> IdFactory:
    """
    Deterministic ids: "p_1", "p_2", ... Each factory owns its own counter,
    so two factories with the same prefix will collide. Use one per process
    or per test.
    """
    counter = itertools.count(1)

    def make_id() -> str:
        return f"{prefix}_{next(counter)}"

    return make_id


def uuid_ids(prefix: str = "") -> IdFactory:
    """Random tokens, safe across sessions."""
    def make_id() -> str:
        token = uuid.uuid4().hex
        return f"{prefix}_{token}" if prefix else token

    return make_id
