"""Whole-state snapshot history."""

from __future__ import annotations

from typing import Generic, Optional, Tuple, TypeVar

from history_engine.config import HistoryConfig

from .base import HistoryManager
from .bounded import Timeline, TimelineSnapshot
from .equality import Equality, structurally_equal

T = TypeVar("T")


class StateHistoryManager(HistoryManager, Generic[T]):
    """Tracks an opaque value across time.

    ``present`` is held apart from the timeline and is never stored in
    ``past`` or ``future``. Writing a value structurally equal to ``present``
    is ignored, so redundant writes do not pollute the undo stack. Values are
    stored by reference: callers must replace tracked values rather than
    mutate them in place.

    Pass ``equals`` when states may be cyclic or carry non-serializable
    members; the default comparison only handles JSON-like data.
    """

    kind = "history.state"

    def __init__(
        self,
        initial_state: T,
        max_history: Optional[int] = None,
        *,
        config: Optional[HistoryConfig] = None,
        equals: Optional[Equality] = None,
        name: str = "default",
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            max_history, config=config, name=name, logger_name=logger_name
        )
        self._present: T = initial_state
        self._timeline: Timeline[T] = Timeline()
        self._equals: Equality = equals or structurally_equal

    @property
    def state(self) -> T:
        return self._present

    @property
    def past(self) -> Tuple[T, ...]:
        return tuple(self._timeline.past)

    @property
    def future(self) -> Tuple[T, ...]:
        return tuple(self._timeline.future)

    @property
    def can_undo(self) -> bool:
        return bool(self._timeline.past)

    @property
    def can_redo(self) -> bool:
        return bool(self._timeline.future)

    def snapshot(self) -> TimelineSnapshot[T]:
        past, future = self._timeline.views()
        return TimelineSnapshot(past=past, future=future, present=self._present)

    def set(self, new_state: T) -> None:
        with self._span("set") as handle:
            if self._equals(self._present, new_state):
                handle.add_metadata("status", "noop")
                self._record("history.set_ignored")
                return

            evicted = self._timeline.push_past(self._present, self.max_history)
            self._present = new_state
            discarded = self._timeline.discard_future()
            handle.add_metadata("past", len(self._timeline.past))
            if evicted is not None:
                self._record("history.evicted")
            if discarded:
                self._record("history.branch_discarded", dropped=discarded)
        self._notify()

    def undo(self) -> None:
        with self._span("undo") as handle:
            if not self._timeline.past:
                handle.add_metadata("status", "noop")
                return
            previous = self._timeline.pop_past()
            self._timeline.push_future(self._present)
            self._present = previous
        self._notify()

    def redo(self) -> None:
        with self._span("redo") as handle:
            if not self._timeline.future:
                handle.add_metadata("status", "noop")
                return
            upcoming = self._timeline.shift_future()
            if self._timeline.push_past(self._present, self.max_history) is not None:
                self._record("history.evicted")
            self._present = upcoming
        self._notify()

    def clear(self) -> None:
        """Forget every past and future point, keeping the current state."""

        with self._span("clear") as handle:
            if not (self._timeline.past or self._timeline.future):
                handle.add_metadata("status", "noop")
                return
            self._timeline.clear()
        self._notify()


__all__ = ["StateHistoryManager"]
