"""Diagnostics reported by validators and data source reads."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Iterable


class Severity(enum.Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single problem report, optionally tied to an attribute path."""

    severity: Severity
    summary: str
    detail: str = ""
    attribute_path: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary


class DiagnosticsError(Exception):
    """Raised when an operation produces error diagnostics."""

    def __init__(self, diagnostics: Iterable[Diagnostic]):
        self.diagnostics = list(diagnostics)
        super().__init__("; ".join(str(d) for d in self.diagnostics))


def _quote(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def error_diag(err: BaseException | None, summary: str, *args: object) -> list[Diagnostic]:
    """Build an error diagnostic; ``summary`` is formatted with ``str.format``."""
    return error_diag_path(err, "", summary, *args)


def error_diag_path(
    err: BaseException | None, attr: str, summary: str, *args: object
) -> list[Diagnostic]:
    """Build an error diagnostic attached to attribute ``attr`` when given."""
    text = summary.format(*args) if args else summary
    return [
        Diagnostic(
            severity=Severity.ERROR,
            summary=text,
            detail=str(err) if err is not None else "",
            attribute_path=(attr,) if attr else (),
        )
    ]


def _import_detail(resource_name: str) -> str:
    return (
        "To be managed via Terraform, this resource needs to be imported into the State. "
        f"Please see the resource documentation for {_quote(resource_name)} for more information."
    )


def import_as_duplicate_diag(resource_name: str, resource_id: str, name: str) -> list[Diagnostic]:
    """Report that a resource with the same name already exists."""
    return [
        Diagnostic(
            severity=Severity.ERROR,
            summary=(
                f"An existing {_quote(resource_name)} with name {_quote(name)} "
                f"(ID: {_quote(resource_id)}) was found and `prevent_duplicate_names` was specified"
            ),
            detail=_import_detail(resource_name),
            attribute_path=("id",),
        )
    ]


def import_as_exists_diag(resource_name: str, resource_id: str) -> list[Diagnostic]:
    """Report that a resource with the given ID already exists."""
    return [
        Diagnostic(
            severity=Severity.ERROR,
            summary=f"A resource with the ID {_quote(resource_id)} already exists",
            detail=_import_detail(resource_name),
            attribute_path=("id",),
        )
    ]