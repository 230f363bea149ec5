"""Normalized key strokes and the events that carry them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

PRIMARY_MODIFIERS = frozenset({"ctrl", "meta"})

_MODIFIER_ALIASES = {
    "control": "ctrl",
    "cmd": "meta",
    "command": "meta",
    "super": "meta",
    "win": "meta",
    "option": "alt",
}


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = (m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted({_MODIFIER_ALIASES.get(v, v) for v in values}))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single key press with its modifiers, compared case-insensitively."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join((*self.modifiers, self.key))
        return self.key

    @property
    def has_primary(self) -> bool:
        """True when Ctrl or Cmd is held."""

        return not PRIMARY_MODIFIERS.isdisjoint(self.modifiers)

    def has(self, modifier: str) -> bool:
        return _MODIFIER_ALIASES.get(modifier.lower(), modifier.lower()) in self.modifiers

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Parse ``"ctrl+shift+z"`` style tokens.

        A bare upper-case letter implies Shift, the way hosts report
        ``Ctrl+Shift+Z`` as ``ctrl+Z``.
        """

        text = token.strip()
        if not text:
            raise ValueError("token cannot be empty")
        if text.endswith("++") or text == "+":
            head, key = text[:-1], "+"
        else:
            head, _, key = text.rpartition("+")
        modifiers = [part for part in head.split("+") if part]
        if len(key) == 1 and key.isalpha() and key.isupper():
            modifiers.append("shift")
        return cls(key=key, modifiers=tuple(modifiers))


@dataclass(slots=True)
class KeyEvent:
    """Key event delivered by a host source to its listeners.

    Listeners that act on the event call ``prevent_default`` so the host
    skips its own handling of the combination.
    """

    stroke: KeyStroke
    default_prevented: bool = False

    @classmethod
    def from_token(cls, token: str) -> "KeyEvent":
        return cls(stroke=KeyStroke.parse(token))

    def prevent_default(self) -> None:
        self.default_prevented = True


__all__ = ["KeyEvent", "KeyStroke", "PRIMARY_MODIFIERS"]
