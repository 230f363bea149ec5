"""Structural equality for opaque tracked states.

States are reduced to a tagged, type-preserving canonical form and then
rendered as compact JSON. Mapping keys keep their types (``{1: "a"}`` differs
from ``{"1": "a"}``) and may be of mixed types. Mappings and sets compare
regardless of ordering. Enums and dataclasses carry their class name. Ints
and integral floats compare alike (``1 == 1.0``), while ``True`` stays distinct
from ``1``. Tuples and lists compare alike.

This is defined for acyclic values built from ``None``, bools, numbers,
strings, lists, tuples, sets, mappings, enums and dataclasses. A cyclic
value, or one holding functions, handles or other members, raises
``UncomparableStateError``; callers tracking such values must hand the
manager an explicit ``equals`` predicate instead.
"""

from __future__ import annotations

import dataclasses
import enum
import json
import math
from collections.abc import Mapping
from typing import Any, Callable, Set

from .errors import UncomparableStateError

Equality = Callable[[Any, Any], bool]


def _qualname(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _encode(form: Any) -> str:
    return json.dumps(form, separators=(",", ":"), ensure_ascii=False)


def _number(value: float) -> Any:
    if math.isfinite(value) and value.is_integer():
        return ["num", int(value)]
    return ["num", value]


def _form(value: Any, path: Set[int]) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, enum.Enum):
        return ["enum", _qualname(value), value.name]
    if isinstance(value, int):
        return ["num", value]
    if isinstance(value, float):
        return _number(value)

    marker = id(value)
    if marker in path:
        raise ValueError("circular reference detected")
    path.add(marker)
    try:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return [
                "dataclass",
                _qualname(value),
                [
                    [item.name, _form(getattr(value, item.name), path)]
                    for item in dataclasses.fields(value)
                ],
            ]
        if isinstance(value, Mapping):
            pairs = [[_form(key, path), _form(item, path)] for key, item in value.items()]
            return ["map", sorted(pairs, key=lambda pair: _encode(pair[0]))]
        if isinstance(value, (set, frozenset)):
            return ["set", sorted((_form(item, path) for item in value), key=_encode)]
        if isinstance(value, (list, tuple)):
            return ["seq", [_form(item, path) for item in value]]
    finally:
        path.discard(marker)
    raise TypeError(f"{type(value).__name__} is not serializable")


def canonicalize(value: Any) -> str:
    """Return the canonical text used to decide structural equality."""

    try:
        return _encode(_form(value, set()))
    except (TypeError, ValueError, RecursionError) as exc:
        raise UncomparableStateError(
            f"cannot compare state of type {type(value).__name__}: {exc}",
            value=value,
        ) from exc


def structurally_equal(left: Any, right: Any) -> bool:
    if left is right:
        return True
    return canonicalize(left) == canonicalize(right)


__all__ = ["Equality", "canonicalize", "structurally_equal"]
