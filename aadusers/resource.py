"""Attribute storage for a resource or data source being read."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .diagnostics import Diagnostic, error_diag_path


class ResourceData:
    """Holds an ID and attribute values, optionally restricted to a schema."""

    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        schema: Iterable[str] | None = None,
        id: str = "",
    ):
        self.id = id
        self._schema = frozenset(schema) if schema is not None else None
        self._values: dict[str, Any] = {}
        for key, value in (attributes or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any:
        """Return the value of ``key``, or None if it has not been set."""
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set ``key``; raises KeyError if the schema does not define it."""
        if self._schema is not None and key not in self._schema:
            raise KeyError(f"Invalid address to set: {key!r}")
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"ResourceData(id={self.id!r}, attributes={self._values!r})"


def set_attribute(d: ResourceData, attr: str, value: Any) -> list[Diagnostic]:
    """Set an attribute, returning diagnostics instead of raising on failure."""
    try:
        d.set(attr, value)
    except (KeyError, TypeError, ValueError) as err:
        return error_diag_path(err, attr, "Could not set attribute")
    return []