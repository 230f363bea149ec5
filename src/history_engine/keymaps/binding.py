"""Scoped subscription translating key events into undo/redo calls."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, List, Optional, Protocol

from history_engine.runtime.telemetry import record_event

from .defaults import Command, resolve_shortcut
from .models import KeyEvent

KeyListener = Callable[[KeyEvent], None]


class KeyEventSource(Protocol):
    """Host-side producer of key events (window, widget, terminal app...)."""

    def add_listener(self, listener: KeyListener) -> None:
        ...

    def remove_listener(self, listener: KeyListener) -> None:
        ...


class HistoryTarget(Protocol):
    def undo(self) -> None:
        ...

    def redo(self) -> None:
        ...


class KeyEventBus:
    """In-process key event source; listeners run in registration order."""

    def __init__(self) -> None:
        self._listeners: List[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, event: KeyEvent) -> KeyEvent:
        for listener in list(self._listeners):
            listener(event)
        return event


class ShortcutBinding(AbstractContextManager["ShortcutBinding"]):
    """Routes recognised combinations from ``source`` to ``target``.

    Every matched event triggers exactly one synchronous ``undo()`` or
    ``redo()`` call and has its default handling suppressed; nothing is queued
    or coalesced. ``release`` is idempotent and the context-manager form
    releases on every exit path.
    """

    def __init__(
        self,
        source: KeyEventSource,
        target: HistoryTarget,
        *,
        logger_name: Optional[str] = None,
    ) -> None:
        self.source = source
        self.target = target
        self._logger_name = logger_name
        self._listener: KeyListener = self.handle_event
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> "ShortcutBinding":
        if not self._active:
            self.source.add_listener(self._listener)
            self._active = True
            self._record("shortcuts.attached")
        return self

    def release(self) -> None:
        if not self._active:
            return
        try:
            self.source.remove_listener(self._listener)
        finally:
            self._active = False
            self._record("shortcuts.released")

    def handle_event(self, event: KeyEvent) -> Optional[Command]:
        command = resolve_shortcut(event.stroke)
        if command is None:
            return None
        event.prevent_default()
        if command == "undo":
            self.target.undo()
        else:
            self.target.redo()
        return command

    def __enter__(self) -> "ShortcutBinding":
        return self.activate()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    def _record(self, event: str) -> None:
        record_event(
            event,
            level="debug",
            data={"source": type(self.source).__name__},
            logger_name=self._logger_name,
        )


__all__ = [
    "HistoryTarget",
    "KeyEventBus",
    "KeyEventSource",
    "KeyListener",
    "ShortcutBinding",
]
