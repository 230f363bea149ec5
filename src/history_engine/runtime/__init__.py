"""Runtime services shared by the history managers."""

from . import telemetry

__all__ = ["telemetry"]
