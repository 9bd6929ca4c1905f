"""JSON value kinds, deep structural equality and field-level diffs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


class _Missing:
    """Marks a key or index present on one side of a diff only."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def kind(value: Any) -> str:
    """Classify a parsed JSON value. bool is checked before number."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def json_equal(left: Any, right: Any) -> bool:
    k = kind(left)
    if k != kind(right):
        return False
    if k == "object":
        if left.keys() != right.keys():
            return False
        return all(json_equal(left[key], right[key]) for key in left)
    if k == "array":
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    return left == right


@dataclass(frozen=True)
class FieldDiff:
    path: str
    left: Any
    right: Any

    @property
    def added(self) -> bool:
        return self.left is MISSING

    @property
    def removed(self) -> bool:
        return self.right is MISSING


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def diff_values(left: Any, right: Any, path: str = "") -> list[FieldDiff]:
    """Walk two values and return every differing leaf.

    Objects are compared key by key (left's keys first, then keys only in
    right), arrays index by index. Returns [] iff ``json_equal(left, right)``.
    """
    k = kind(left)
    if k != kind(right):
        return [FieldDiff(path, left, right)]

    if k == "object":
        diffs: list[FieldDiff] = []
        for key in left:
            sub = _join(path, key)
            if key not in right:
                diffs.append(FieldDiff(sub, left[key], MISSING))
            else:
                diffs.extend(diff_values(left[key], right[key], sub))
        for key in right:
            if key not in left:
                diffs.append(FieldDiff(_join(path, key), MISSING, right[key]))
        return diffs

    if k == "array":
        diffs = []
        for i in range(max(len(left), len(right))):
            sub = f"{path}[{i}]"
            a = left[i] if i < len(left) else MISSING
            b = right[i] if i < len(right) else MISSING
            if a is MISSING or b is MISSING:
                diffs.append(FieldDiff(sub, a, b))
            else:
                diffs.extend(diff_values(a, b, sub))
        return diffs

    if left != right:
        return [FieldDiff(path, left, right)]
    return []


def freeze(value: Any) -> Any:
    """Return a read-only deep copy: objects become mapping proxies, arrays tuples."""
    k = kind(value)
    if k == "object":
        return MappingProxyType({key: freeze(v) for key, v in value.items()})
    if k == "array":
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze: plain dicts and lists, ready for json.dumps."""
    k = kind(value)
    if k == "object":
        return {key: thaw(v) for key, v in value.items()}
    if k == "array":
        return [thaw(v) for v in value]
    return value
