"""Conversions between attribute lists and lists of strings."""

from __future__ import annotations

from typing import Any, Iterable


def expand_string_list(items: Iterable[Any]) -> list[str]:
    """Return the items as a list of strings; raises TypeError on a non-string."""
    result = []
    for item in items:
        if not isinstance(item, str):
            raise TypeError(f"expected a string, got {type(item).__name__}")
        result.append(item)
    return result


def flatten_string_list(items: Iterable[str] | None) -> list[Any]:
    """Return a new list of the items; None gives an empty list."""
    return list(items) if items is not None else []