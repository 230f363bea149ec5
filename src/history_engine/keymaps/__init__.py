"""Keyboard shortcut binding for history managers."""

from .binding import (
    HistoryTarget,
    KeyEventBus,
    KeyEventSource,
    KeyListener,
    ShortcutBinding,
)
from .defaults import HISTORY_SHORTCUTS, REDO, UNDO, ShortcutSpec, resolve_shortcut
from .models import KeyEvent, KeyStroke

__all__ = [
    "HISTORY_SHORTCUTS",
    "HistoryTarget",
    "KeyEvent",
    "KeyEventBus",
    "KeyEventSource",
    "KeyListener",
    "KeyStroke",
    "REDO",
    "ShortcutBinding",
    "ShortcutSpec",
    "UNDO",
    "resolve_shortcut",
]
