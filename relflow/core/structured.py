"""Narrowing helpers for the plain objects `tomllib` and `json` hand back."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    return isinstance(obj, dict) and all(
        isinstance(k, str) for k in cast(dict[object, object], obj)
    )


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def get_table(table: Mapping[str, object], key: str) -> StrDict:
    """Nested table at `key`; `{}` when absent or not a table."""
    return as_str_dict(table.get(key)) or {}


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at `key`, or None when absent or not a string.

    `""` is returned as is: several settings use it to mean "disabled".
    """
    value = table.get(key)
    return value.strip() if isinstance(value, str) else None


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """String list at `key` as a tuple; None unless every element is a string."""
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    if not all(isinstance(item, str) for item in items):
        return None
    return tuple(cast(list[str], items))
