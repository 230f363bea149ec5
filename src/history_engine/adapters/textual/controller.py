"""Textual adapter wiring a history manager to Textual key events and widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from history_engine.keymaps import KeyEvent, KeyEventBus, KeyStroke
from history_engine.timeline import HistoryManager, TimelineSnapshot


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render_state: Callable[[TimelineSnapshot[Any]], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualShortcutSource(KeyEventBus):
    """Key event source fed from an ``App.on_key`` handler.

    Textual names keys like ``"ctrl+z"`` or ``"ctrl+shift+z"``; those tokens
    are parsed into ``KeyStroke`` values before dispatch.
    """

    def handle_textual_key(self, key: str) -> KeyEvent:
        return self.dispatch(KeyEvent(stroke=KeyStroke.parse(key)))


class TextualHistoryAdapter:
    """Bridges a history manager to Textual-friendly callbacks.

    The adapter owns the manager's shortcut subscription: it activates the
    manager against its own source on construction and releases it in
    ``close``.
    """

    def __init__(
        self,
        manager: HistoryManager,
        hooks: TextualUIHooks,
        *,
        source: Optional[TextualShortcutSource] = None,
    ) -> None:
        self.manager = manager
        self.hooks = hooks
        self.source = source or TextualShortcutSource()
        self._unsubscribe: Optional[Callable[[], None]] = manager.subscribe(
            self._on_change
        )
        manager.activate(self.source)
        self._on_change(manager.snapshot())

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def handle_textual_key(self, key: str) -> bool:
        """Dispatch ``key``; True when the host should skip its default handling."""

        self._log_state("key ->", key=key)
        event = self.source.handle_textual_key(key)
        if event.default_prevented:
            self._log_state("shortcut <-", token=event.stroke.token)
        return event.default_prevented

    def close(self) -> None:
        try:
            self.manager.deactivate()
        finally:
            if self._unsubscribe is not None:
                self._unsubscribe()
                self._unsubscribe = None

    def _on_change(self, snapshot: TimelineSnapshot[Any]) -> None:
        self.hooks.render_state(snapshot)
        self.hooks.update_status(
            f"undo:{'on' if snapshot.can_undo else 'off'} "
            f"redo:{'on' if snapshot.can_redo else 'off'}"
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        snapshot = self.manager.snapshot()
        return {
            "manager": self.manager.name,
            "past": len(snapshot.past),
            "future": len(snapshot.future),
        }


__all__ = ["TextualHistoryAdapter", "TextualShortcutSource", "TextualUIHooks"]
