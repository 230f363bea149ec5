"""Construction-time settings for history managers."""

from __future__ import annotations

from dataclasses import dataclass

from history_engine.runtime.telemetry import env

DEFAULT_MAX_HISTORY = 50


def validate_max_history(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"max_history must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError("max_history must be positive")
    return value


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Bound applied to a manager's past sequence."""

    max_history: int = DEFAULT_MAX_HISTORY

    def __post_init__(self) -> None:
        validate_max_history(self.max_history)

    @classmethod
    def from_env(cls) -> "HistoryConfig":
        """Read ``HISTORY_ENGINE_MAX_HISTORY``, falling back to the default."""

        raw = env("MAX_HISTORY")
        if raw is None or not raw.strip():
            return cls()
        try:
            value = int(raw)
        except ValueError as exc:
            raise ValueError(
                f"HISTORY_ENGINE_MAX_HISTORY must be an integer, got {raw!r}"
            ) from exc
        return cls(max_history=value)


__all__ = ["DEFAULT_MAX_HISTORY", "HistoryConfig", "validate_max_history"]
