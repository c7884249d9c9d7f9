"""Resource importers that validate the resource ID first."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .resource import ResourceData

log = logging.getLogger(__name__)

StateFunc = Callable[[ResourceData, Any], "list[ResourceData]"]
IdValidator = Callable[[str], Any]


class ResourceIdError(ValueError):
    """Raised when a resource ID fails validation before import."""

    def __init__(self, resource_id: str, reason: BaseException):
        self.resource_id = resource_id
        self.reason = reason
        super().__init__(f"parsing Resource ID {resource_id!r}: {reason}")


@dataclass(frozen=True)
class ResourceImporter:
    """Wraps the function that turns an imported ID into resource state."""

    state_func: StateFunc

    def import_state(self, d: ResourceData, meta: Any) -> list[ResourceData]:
        return self.state_func(d, meta)


def import_state_passthrough(d: ResourceData, meta: Any) -> list[ResourceData]:
    """Import the resource data unchanged."""
    return [d]


def validate_resource_id_prior_to_import(id_parser: IdValidator) -> ResourceImporter:
    """Importer that validates the ID and then imports it unchanged."""
    return validate_resource_id_prior_to_import_then(id_parser, import_state_passthrough)


def validate_resource_id_prior_to_import_then(
    id_parser: IdValidator, importer: StateFunc
) -> ResourceImporter:
    """Importer that validates the ID with ``id_parser`` before calling ``importer``.

    ``id_parser`` signals an invalid ID by raising.
    """

    def state_func(d: ResourceData, meta: Any) -> list[ResourceData]:
        log.debug("Importing Resource - parsing %r", d.id)
        try:
            id_parser(d.id)
        except Exception as err:
            raise ResourceIdError(d.id, err) from err
        return importer(d, meta)

    return ResourceImporter(state_func)