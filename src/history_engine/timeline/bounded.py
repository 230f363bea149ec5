"""Past/future bookkeeping shared by both history managers."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Generic, Optional, Tuple, TypeVar

X = TypeVar("X")


@dataclass(slots=True)
class Timeline(Generic[X]):
    """Bounded past plus an unbounded redo branch.

    ``past`` is ordered oldest first. ``future`` is ordered nearest-undone
    first, so its front is always the next point ``redo`` moves to.
    """

    past: Deque[X] = field(default_factory=deque)
    future: Deque[X] = field(default_factory=deque)

    def push_past(self, item: X, limit: int) -> Optional[X]:
        """Append ``item`` and return the entry evicted to honour ``limit``."""

        self.past.append(item)
        if len(self.past) > limit:
            return self.past.popleft()
        return None

    def pop_past(self) -> X:
        return self.past.pop()

    def push_future(self, item: X) -> None:
        self.future.appendleft(item)

    def shift_future(self) -> X:
        return self.future.popleft()

    def discard_future(self) -> int:
        dropped = len(self.future)
        self.future.clear()
        return dropped

    def clear(self) -> None:
        self.past.clear()
        self.future.clear()

    def views(self) -> Tuple[Tuple[X, ...], Tuple[X, ...]]:
        return tuple(self.past), tuple(self.future)


@dataclass(frozen=True, slots=True)
class TimelineSnapshot(Generic[X]):
    """Immutable read view handed to observers and UI layers.

    ``present`` is ``None`` for action histories, whose present is implicit.
    """

    past: Tuple[X, ...]
    future: Tuple[X, ...]
    present: Optional[X] = None

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


__all__ = ["Timeline", "TimelineSnapshot"]
