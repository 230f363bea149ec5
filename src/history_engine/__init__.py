"""UI-agnostic undo/redo history engine."""

from .config import HistoryConfig
from .keymaps import KeyEvent, KeyEventBus, KeyStroke, ShortcutBinding
from .timeline import (
    Action,
    ActionHistoryManager,
    HistoryError,
    ReentrantHistoryError,
    Reversible,
    StateHistoryManager,
    TimelineSnapshot,
    UncomparableStateError,
)

__all__ = [
    "Action",
    "ActionHistoryManager",
    "HistoryConfig",
    "HistoryError",
    "KeyEvent",
    "KeyEventBus",
    "KeyStroke",
    "ReentrantHistoryError",
    "Reversible",
    "ShortcutBinding",
    "StateHistoryManager",
    "TimelineSnapshot",
    "UncomparableStateError",
    "adapters",
    "keymaps",
    "runtime",
    "timeline",
]

__version__ = "0.1.0"
