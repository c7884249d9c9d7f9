"""Helpers for HTTP responses and string lists."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Iterable


def response_was_status_code(response: Any, status_code: int) -> bool:
    """Whether ``response`` exists and has ``status_code``; None means no response."""
    if response is None:
        return False
    return getattr(response, "status_code", None) == status_code


def response_was_not_found(response: Any) -> bool:
    """Whether ``response`` is a 404."""
    return response_was_status_code(response, HTTPStatus.NOT_FOUND)


def difference(a: Iterable[str], b: Iterable[str]) -> list[str]:
    """Return the elements of ``a`` that are not in ``b``, in order."""
    excluded = set(b)
    return [x for x in a if x not in excluded]