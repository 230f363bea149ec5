"""The undo/redo shortcut table shared by every history manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .models import KeyStroke

Command = Literal["undo", "redo"]

UNDO: Command = "undo"
REDO: Command = "redo"


@dataclass(frozen=True, slots=True)
class ShortcutSpec:
    """One recognised combination, used for help text and docs."""

    label: str
    command: Command
    description: str


HISTORY_SHORTCUTS: tuple[ShortcutSpec, ...] = (
    ShortcutSpec("Ctrl/Cmd+Z", UNDO, "Undo"),
    ShortcutSpec("Ctrl/Cmd+Shift+Z", REDO, "Redo"),
    ShortcutSpec("Ctrl/Cmd+Y", REDO, "Redo"),
)


def resolve_shortcut(stroke: KeyStroke) -> Optional[Command]:
    """Map a stroke to ``"undo"``/``"redo"``, or ``None`` when unrecognised.

    Ctrl and Cmd are interchangeable. Shift turns Z into redo; Y is redo
    with or without Shift.
    """

    if not stroke.has_primary:
        return None
    if stroke.key == "z":
        return REDO if stroke.has("shift") else UNDO
    if stroke.key == "y":
        return REDO
    return None


__all__ = [
    "Command",
    "HISTORY_SHORTCUTS",
    "REDO",
    "ShortcutSpec",
    "UNDO",
    "resolve_shortcut",
]
