from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, List

import pytest

from history_engine import (
    HistoryConfig,
    StateHistoryManager,
    TimelineSnapshot,
    UncomparableStateError,
)


class Tool(enum.Enum):
    BRUSH = "brush"


@dataclass(frozen=True)
class Token:
    name: str
    x: int
    y: int


def make_manager(initial: Any = 0, max_history: int = 50, **kwargs: Any) -> StateHistoryManager[Any]:
    return StateHistoryManager(initial, max_history, **kwargs)


def timeline(manager: StateHistoryManager[Any]) -> tuple[list[Any], Any, list[Any]]:
    return list(manager.past), manager.state, list(manager.future)


def test_scenario_bounded_undo_then_branch_discard() -> None:
    manager = make_manager(0, max_history=2)

    manager.set(1)
    manager.set(2)
    manager.set(3)
    assert timeline(manager) == ([1, 2], 3, [])

    manager.undo()
    assert timeline(manager) == ([1], 2, [3])

    manager.undo()
    assert timeline(manager) == ([], 1, [2, 3])

    manager.set(9)
    assert timeline(manager) == ([1], 9, [])


def test_past_never_exceeds_bound_and_keeps_latest_values() -> None:
    manager = make_manager(0, max_history=3)

    for value in range(1, 11):
        manager.set(value)
        assert len(manager.past) <= 3

    assert manager.past == (7, 8, 9)
    assert manager.state == 10


def test_set_with_structurally_equal_value_is_ignored() -> None:
    manager = make_manager({"a": [1, 2], "b": {"c": 3}})
    manager.set({"a": [1, 2], "b": {"c": 4}})
    manager.undo()
    before = timeline(manager)

    manager.set({"b": {"c": 3}, "a": [1, 2]})

    assert timeline(manager) == before
    assert manager.can_redo


def test_dataclass_states_compare_by_fields() -> None:
    manager = make_manager(Token("orc", 1, 2))

    manager.set(Token("orc", 1, 2))
    assert not manager.can_undo

    manager.set(Token("orc", 2, 2))
    assert manager.past == (Token("orc", 1, 2),)


def test_tuples_and_lists_compare_alike() -> None:
    manager = make_manager([1, 2])

    manager.set((1, 2))

    assert not manager.can_undo
    assert manager.state == [1, 2]


def test_set_discards_redo_branch() -> None:
    manager = make_manager("a")
    for value in ("b", "c", "d"):
        manager.set(value)
    manager.undo()
    manager.undo()
    assert manager.future == ("c", "d")

    manager.set("x")

    assert manager.future == ()
    assert not manager.can_redo


def test_undo_then_redo_restores_present_and_lengths() -> None:
    manager = make_manager(0, max_history=4)
    for value in range(1, 7):
        manager.set(value)
    past_len, future_len = len(manager.past), len(manager.future)

    manager.undo()
    manager.redo()

    assert manager.state == 6
    assert (len(manager.past), len(manager.future)) == (past_len, future_len)


def test_undo_and_redo_on_empty_edges_are_noops() -> None:
    manager = make_manager("only")

    manager.undo()
    manager.redo()

    assert timeline(manager) == ([], "only", [])
    assert not manager.can_undo
    assert not manager.can_redo


def test_undo_at_oldest_point_keeps_redo_branch() -> None:
    manager = make_manager(0)
    manager.set(1)
    manager.set(2)
    manager.undo()
    manager.undo()
    before = timeline(manager)
    assert before == ([], 0, [1, 2])

    manager.undo()

    assert timeline(manager) == before


def test_redo_at_newest_point_keeps_past() -> None:
    manager = make_manager(0)
    manager.set(1)
    manager.set(2)
    before = timeline(manager)

    manager.redo()

    assert timeline(manager) == before == ([0, 1], 2, [])


def test_mixed_key_mapping_is_tracked() -> None:
    manager = make_manager({1: "a", "name": "b"})

    manager.set({"name": "b", 1: "a"})
    assert not manager.can_undo

    manager.set({1: "a", "name": "c"})
    assert manager.state == {1: "a", "name": "c"}
    assert manager.past == ({1: "a", "name": "b"},)


@pytest.mark.parametrize(
    ("initial", "changed"),
    [
        ({1: "a"}, {"1": "a"}),
        ({None: 1}, {"null": 1}),
        ({"tool": Tool.BRUSH}, {"tool": "brush"}),
        ({1, 2}, ["1", "2"]),
    ],
)
def test_values_differing_only_in_type_are_recorded(initial: Any, changed: Any) -> None:
    manager = make_manager(initial)

    manager.set(changed)

    assert manager.state == changed
    assert manager.past == (initial,)


def test_int_and_equal_float_is_a_redundant_write() -> None:
    manager = make_manager({"hp": 1})

    manager.set({"hp": 1.0})

    assert not manager.can_undo
    assert manager.state == {"hp": 1}


def test_clear_keeps_present() -> None:
    manager = make_manager(0)
    manager.set(1)
    manager.set(2)
    manager.undo()

    manager.clear()

    assert timeline(manager) == ([], 1, [])


def test_custom_equality_predicate() -> None:
    manager = make_manager(
        {"id": 1, "rev": 1}, equals=lambda left, right: left["id"] == right["id"]
    )

    manager.set({"id": 1, "rev": 2})
    assert not manager.can_undo

    manager.set({"id": 2, "rev": 1})
    assert manager.can_undo


def test_cyclic_state_requires_explicit_predicate() -> None:
    cyclic: list[Any] = []
    cyclic.append(cyclic)
    manager = make_manager([1])

    with pytest.raises(UncomparableStateError, match="equals="):
        manager.set(cyclic)
    assert timeline(manager) == ([], [1], [])

    identity = make_manager([1], equals=lambda left, right: left is right)
    identity.set(cyclic)
    assert identity.state is cyclic


def test_non_serializable_state_is_a_type_error() -> None:
    manager = make_manager(0)

    with pytest.raises(TypeError):
        manager.set(object())


def test_observers_see_changes_but_not_noops() -> None:
    manager = make_manager(0)
    seen: List[TimelineSnapshot[Any]] = []
    unsubscribe = manager.subscribe(seen.append)

    manager.set(1)
    manager.set(1)
    manager.undo()
    manager.undo()

    assert [snapshot.present for snapshot in seen] == [1, 0]
    assert seen[-1].can_redo and not seen[-1].can_undo

    unsubscribe()
    unsubscribe()
    manager.redo()
    assert len(seen) == 2


def test_snapshot_is_detached_from_later_changes() -> None:
    manager = make_manager(0)
    manager.set(1)
    snapshot = manager.snapshot()

    manager.set(2)

    assert snapshot.past == (0,)
    assert snapshot.present == 1


def test_max_history_validation() -> None:
    with pytest.raises(ValueError):
        make_manager(0, max_history=0)
    with pytest.raises(ValueError):
        StateHistoryManager(0, 5, config=HistoryConfig(max_history=5))

    manager = StateHistoryManager(0, config=HistoryConfig(max_history=1))
    manager.set(1)
    manager.set(2)
    assert manager.past == (1,)
