from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import pytest

from history_engine import UncomparableStateError
from history_engine.timeline import canonicalize, structurally_equal


class Tool(enum.Enum):
    BRUSH = "brush"
    ERASER = "eraser"


class Layer(enum.Enum):
    BRUSH = "brush"


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    x: int
    y: int


def test_mapping_key_order_is_ignored() -> None:
    assert canonicalize({"b": 1, "a": {2, 1}}) == canonicalize({"a": {1, 2}, "b": 1})


def test_mixed_type_keys_are_comparable() -> None:
    assert structurally_equal({1: "a", "name": "b"}, {"name": "b", 1: "a"})
    assert not structurally_equal({1: "a", "name": "b"}, {1: "a", "name": "c"})
    assert structurally_equal({None: 1, (1, 2): "t"}, {(1, 2): "t", None: 1})


def test_key_types_are_preserved() -> None:
    assert not structurally_equal({1: "a"}, {"1": "a"})
    assert not structurally_equal({None: 1}, {"null": 1})
    assert not structurally_equal({True: "x"}, {"true": "x"})


def test_enums_keep_their_class() -> None:
    assert structurally_equal(Tool.BRUSH, Tool.BRUSH)
    assert not structurally_equal(Tool.BRUSH, "brush")
    assert not structurally_equal(Tool.BRUSH, Layer.BRUSH)
    assert not structurally_equal(Tool.BRUSH, Tool.ERASER)


def test_sets_compare_by_members_not_their_text() -> None:
    assert structurally_equal({1, 2}, frozenset({2, 1}))
    assert not structurally_equal({1, 2}, ["1", "2"])
    assert not structurally_equal({1, 2}, [1, 2])
    assert structurally_equal({"a", 1, None}, {None, "a", 1})


def test_integral_floats_equal_ints() -> None:
    assert structurally_equal({"hp": 1}, {"hp": 1.0})
    assert structurally_equal([0, -0.0], [0.0, 0])
    assert not structurally_equal(1, 1.5)
    assert not structurally_equal(True, 1)
    assert not structurally_equal(1, "1")


def test_dataclasses_compare_by_class_and_fields() -> None:
    assert structurally_equal(Point(1, 2), Point(1, 2))
    assert not structurally_equal(Point(1, 2), Point(2, 1))
    assert not structurally_equal(Point(1, 2), Size(1, 2))
    assert not structurally_equal(Point(1, 2), {"x": 1, "y": 2})


def test_sequences_compare_alike_but_stay_distinct_from_strings() -> None:
    assert structurally_equal((1, [2, 3]), [1, (2, 3)])
    assert not structurally_equal(["seq"], "seq")
    assert not structurally_equal([1, 2], [2, 1])


def test_shared_references_are_not_cycles() -> None:
    shared = [1, 2]

    assert structurally_equal({"a": shared, "b": shared}, {"a": [1, 2], "b": [1, 2]})


@pytest.mark.parametrize("value", [object(), {"fn": len}, [1, {2: print}]])
def test_unsupported_members_raise(value: Any) -> None:
    with pytest.raises(UncomparableStateError, match="equals="):
        canonicalize(value)


def test_cycles_raise() -> None:
    cyclic: dict[str, Any] = {}
    cyclic["self"] = cyclic

    with pytest.raises(UncomparableStateError):
        canonicalize(cyclic)
