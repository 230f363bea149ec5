"""Action-based history: the manager sequences caller-supplied procedures.

Failure policy: when an action's ``undo`` or ``redo`` procedure raises, the
action has already been moved between ``past`` and ``future``. The move is
not rolled back; the exception propagates unchanged to the caller of
``undo()``/``redo()`` and the timeline stays in its post-move state.
Observers still receive the post-move snapshot first; an observer error at
that point is logged, never raised in place of the procedure's exception.

Procedures must not call back into the manager that is running them. Doing
so raises ``ReentrantHistoryError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, Protocol, Tuple, TypeVar, runtime_checkable

from history_engine.config import HistoryConfig
from history_engine.runtime.telemetry import SpanHandle

from .base import HistoryManager
from .bounded import Timeline, TimelineSnapshot
from .errors import ReentrantHistoryError

T = TypeVar("T")


@runtime_checkable
class Reversible(Protocol):
    """Anything the action history can step backwards and forwards."""

    def undo(self) -> None:
        """Revert the effect the forward application produced."""
        ...

    def redo(self) -> None:
        """Re-apply the forward effect after an undo."""
        ...


@dataclass(frozen=True, slots=True, eq=False)
class Action(Generic[T]):
    """Reversible operation built from two closures.

    ``type`` and ``payload`` are passed through untouched for callers and UI
    layers; the manager never looks at them. Actions compare by identity.
    """

    type: str
    payload: T
    undo: Callable[[], None]
    redo: Callable[[], None]

    def __post_init__(self) -> None:
        if not self.type:
            raise ValueError("Action type cannot be empty")
        if not callable(self.undo) or not callable(self.redo):
            raise TypeError("Action undo/redo must be callable")


def _label(action: Reversible) -> str:
    return str(getattr(action, "type", type(action).__name__))


class ActionHistoryManager(HistoryManager, Generic[T]):
    """Bounded, branch-discarding timeline of reversible actions.

    ``add_action`` assumes the forward effect was already applied by the
    caller and never invokes the action. ``clear`` only resets bookkeeping.
    """

    kind = "history.actions"

    def __init__(
        self,
        max_history: Optional[int] = None,
        *,
        config: Optional[HistoryConfig] = None,
        name: str = "default",
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            max_history, config=config, name=name, logger_name=logger_name
        )
        self._timeline: Timeline[Reversible] = Timeline()
        self._running: Optional[str] = None

    @property
    def past(self) -> Tuple[Reversible, ...]:
        return tuple(self._timeline.past)

    @property
    def future(self) -> Tuple[Reversible, ...]:
        return tuple(self._timeline.future)

    @property
    def can_undo(self) -> bool:
        return bool(self._timeline.past)

    @property
    def can_redo(self) -> bool:
        return bool(self._timeline.future)

    def snapshot(self) -> TimelineSnapshot[Reversible]:
        past, future = self._timeline.views()
        return TimelineSnapshot(past=past, future=future)

    def add_action(self, action: Reversible) -> None:
        self._guard("add_action")
        with self._span("add_action") as handle:
            handle.add_metadata("action", _label(action))
            if self._timeline.push_past(action, self.max_history) is not None:
                self._record("history.evicted")
            discarded = self._timeline.discard_future()
            if discarded:
                self._record("history.branch_discarded", dropped=discarded)
        self._notify()

    def undo(self) -> None:
        self._guard("undo")
        failure: Optional[Exception] = None
        with self._span("undo") as handle:
            if not self._timeline.past:
                handle.add_metadata("status", "noop")
                return
            action = self._timeline.pop_past()
            self._timeline.push_future(action)
            handle.add_metadata("action", _label(action))
            failure = self._invoke(action, "undo", handle)
        self._finish(failure)

    def redo(self) -> None:
        self._guard("redo")
        failure: Optional[Exception] = None
        with self._span("redo") as handle:
            if not self._timeline.future:
                handle.add_metadata("status", "noop")
                return
            action = self._timeline.shift_future()
            if self._timeline.push_past(action, self.max_history) is not None:
                self._record("history.evicted")
            handle.add_metadata("action", _label(action))
            failure = self._invoke(action, "redo", handle)
        self._finish(failure)

    def clear(self) -> None:
        """Drop both sequences without invoking any procedure."""

        self._guard("clear")
        with self._span("clear") as handle:
            if not (self._timeline.past or self._timeline.future):
                handle.add_metadata("status", "noop")
                return
            self._timeline.clear()
        self._notify()

    def _guard(self, operation: str) -> None:
        if self._running is not None:
            raise ReentrantHistoryError(operation, running=self._running)

    def _invoke(
        self, action: Reversible, procedure: str, handle: SpanHandle
    ) -> Optional[Exception]:
        """Run one procedure, returning its exception instead of raising it."""

        self._running = procedure
        try:
            getattr(action, procedure)()
        except Exception as exc:
            handle.add_metadata("status", "failed")
            self._record(
                "history.action_failed",
                level="error",
                action=_label(action),
                procedure=procedure,
                error=repr(exc),
            )
            return exc
        finally:
            self._running = None
        return None

    def _finish(self, failure: Optional[Exception]) -> None:
        self._notify(pending=failure)
        if failure is not None:
            raise failure


__all__ = ["Action", "ActionHistoryManager", "Reversible"]
