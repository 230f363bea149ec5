"""Undo/redo timelines for whole states and for reversible actions."""

from .actions import Action, ActionHistoryManager, Reversible
from .base import HistoryManager, Observer
from .bounded import Timeline, TimelineSnapshot
from .equality import Equality, canonicalize, structurally_equal
from .errors import HistoryError, ReentrantHistoryError, UncomparableStateError
from .state import StateHistoryManager

__all__ = [
    "Action",
    "ActionHistoryManager",
    "Equality",
    "HistoryError",
    "HistoryManager",
    "Observer",
    "ReentrantHistoryError",
    "Reversible",
    "StateHistoryManager",
    "Timeline",
    "TimelineSnapshot",
    "UncomparableStateError",
    "canonicalize",
    "structurally_equal",
]
