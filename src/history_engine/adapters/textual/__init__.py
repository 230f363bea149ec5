"""Textual host integration."""

from .controller import TextualHistoryAdapter, TextualShortcutSource, TextualUIHooks

__all__ = ["TextualHistoryAdapter", "TextualShortcutSource", "TextualUIHooks"]
