"""Error types raised by the history managers."""

from __future__ import annotations


class HistoryError(RuntimeError):
    """Base class for history engine failures."""


class UncomparableStateError(HistoryError, TypeError):
    """Raised when a state cannot be reduced to a comparable canonical form."""

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(
            f"{message}; pass an explicit `equals=` predicate for payloads that "
            "are cyclic or hold non-serializable members"
        )
        self.value = value


class ReentrantHistoryError(HistoryError):
    """Raised when an action procedure calls back into its own manager."""

    def __init__(self, operation: str, *, running: str) -> None:
        super().__init__(
            f"cannot call {operation}() while an action's {running}() procedure "
            "is still running on the same manager"
        )
        self.operation = operation
        self.running = running


__all__ = ["HistoryError", "ReentrantHistoryError", "UncomparableStateError"]
