"""Surface shared by state and action history managers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Iterator, List, Optional

from history_engine.config import HistoryConfig, validate_max_history
from history_engine.keymaps.binding import KeyEventSource, ShortcutBinding
from history_engine.runtime.telemetry import SpanHandle, record_event, span

from .bounded import TimelineSnapshot

Observer = Callable[[TimelineSnapshot[Any]], None]


def resolve_max_history(
    max_history: Optional[int], config: Optional[HistoryConfig]
) -> int:
    if max_history is not None and config is not None:
        raise ValueError("Provide either `max_history` or `config`, not both.")
    if max_history is not None:
        return validate_max_history(max_history)
    return (config or HistoryConfig.from_env()).max_history


class HistoryManager:
    """Base class owning the bound, observers and the shortcut subscription.

    Managers are single-threaded: every operation runs to completion before
    the next one may start, and nothing is shared between instances.
    """

    kind: str = "history"

    def __init__(
        self,
        max_history: Optional[int] = None,
        *,
        config: Optional[HistoryConfig] = None,
        name: str = "default",
        logger_name: Optional[str] = None,
    ) -> None:
        self.max_history = resolve_max_history(max_history, config)
        self.name = name
        self._logger_name = logger_name
        self._observers: List[Observer] = []
        self._binding: Optional[ShortcutBinding] = None

    @property
    def can_undo(self) -> bool:  # pragma: no cover - abstract override
        raise NotImplementedError

    @property
    def can_redo(self) -> bool:  # pragma: no cover - abstract override
        raise NotImplementedError

    def undo(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def redo(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def clear(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def snapshot(self) -> TimelineSnapshot[Any]:  # pragma: no cover
        raise NotImplementedError

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call ``observer`` with a fresh snapshot after each timeline change.

        Returns a callable that removes the observer; calling it twice is
        harmless.
        """

        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def shortcuts(self) -> Optional[ShortcutBinding]:
        return self._binding

    def activate(self, source: KeyEventSource) -> ShortcutBinding:
        """Attach the undo/redo shortcuts to ``source``.

        A manager listens to at most one source; activating against a new
        source releases the previous subscription first.
        """

        current = self._binding
        if current is not None and current.active and current.source is source:
            return current
        self.deactivate()
        self._binding = ShortcutBinding(
            source, self, logger_name=self._logger_name
        ).activate()
        return self._binding

    def deactivate(self) -> None:
        binding, self._binding = self._binding, None
        if binding is not None:
            binding.release()

    @contextmanager
    def activated(self, source: KeyEventSource) -> Iterator[ShortcutBinding]:
        """Keep the shortcuts attached for the duration of a ``with`` block."""

        binding = self.activate(source)
        try:
            yield binding
        finally:
            self.deactivate()

    def _span(self, operation: str) -> ContextManager[SpanHandle]:
        return span(
            f"history::{operation}",
            logger_name=self._logger_name,
            component=self.kind,
            metadata={
                "manager": self.name,
                "max_history": self.max_history,
            },
        )

    def _record(self, event: str, *, level: str = "debug", **data: object) -> None:
        record_event(
            event,
            level=level,
            data={"manager": self.name, **data},
            logger_name=self._logger_name,
        )

    def _notify(self, *, pending: Optional[BaseException] = None) -> None:
        """Send a snapshot to every observer.

        While ``pending`` is propagating, observer errors are logged instead
        of raised so they cannot replace it.
        """

        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in list(self._observers):
            if pending is None:
                observer(snapshot)
                continue
            try:
                observer(snapshot)
            except Exception as exc:
                self._record(
                    "history.observer_failed",
                    level="error",
                    error=repr(exc),
                    pending=repr(pending),
                )


__all__ = ["HistoryManager", "Observer", "resolve_max_history"]
