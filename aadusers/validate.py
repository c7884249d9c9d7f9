"""Attribute validators returning lists of diagnostics."""

from __future__ import annotations

import re
from typing import Any, Callable, Sequence
from urllib.parse import SplitResult, urlsplit

from .diagnostics import Diagnostic, Severity

Path = Sequence[str]
Validator = Callable[[Any, Path], "list[Diagnostic]"]

UUID_PATTERN = re.compile(
    r"^[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-4[a-fA-F0-9]{3}-[8|9|aA|bB][a-fA-F0-9]{3}-[a-fA-F0-9]{12}\Z"
)

_EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

_HEX32 = re.compile(rb"[0-9a-fA-F]{32}")


def _error(summary: str, path: Path, detail: str = "") -> Diagnostic:
    return Diagnostic(Severity.ERROR, summary, detail, tuple(path))


def _not_a_string(path: Path) -> list[Diagnostic]:
    return [_error("Expected a string value", path)]


def no_empty_strings(value: Any, path: Path = ()) -> list[Diagnostic]:
    """The value must be a string that is not only whitespace."""
    if not isinstance(value, str):
        return _not_a_string(path)
    if not value.strip():
        return [_error("Value must not be empty", path)]
    return []


def string_is_email_address(value: Any, path: Path = ()) -> list[Diagnostic]:
    """The value must be a non-empty, valid e-mail address."""
    if not isinstance(value, str):
        return _not_a_string(path)
    diags = []
    if not value.strip():
        diags.append(_error("Value must not be empty", path))
    if not _EMAIL_PATTERN.fullmatch(value):
        diags.append(_error("Value must be a valid email address", path))
    return diags


def validate_diag(
    validate_func: Callable[[Any, str], "tuple[list[str], list[BaseException]]"],
) -> Validator:
    """Wrap a ``(value, key) -> (warnings, errors)`` function as a validator."""

    def validator(value: Any, path: Path = ()) -> list[Diagnostic]:
        warnings, errors = validate_func(value, ".".join(path))
        diags = [Diagnostic(Severity.WARNING, warning) for warning in warnings]
        diags.extend(Diagnostic(Severity.ERROR, str(err)) for err in errors)
        return diags

    return validator


def _parse_url(value: str) -> SplitResult:
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in value):
        raise ValueError(f"parse {value!r}: net/url: invalid control character in URL")
    if value.startswith(":"):
        raise ValueError(f"parse {value!r}: missing protocol scheme")
    parts = urlsplit(value)
    parts.port  # raises ValueError on a malformed port
    return parts


def is_uri(valid_schemes: Sequence[str], urn_allowed: bool) -> Validator:
    """Build a validator for URLs with one of ``valid_schemes``, or URNs if allowed."""
    schemes = list(valid_schemes)

    def validator(value: Any, path: Path = ()) -> list[Diagnostic]:
        if not isinstance(value, str):
            return _not_a_string(path)
        if value == "":
            return [_error("URL must not be empty", path)]
        if urn_allowed:
            parts = value.split(":")
            if len(parts) >= 3 and parts[0] == "urn":
                return []
        try:
            url = _parse_url(value)
        except ValueError as err:
            return [_error("URL is in an invalid format", path, str(err))]
        if not url.netloc.rpartition("@")[2]:
            return [_error("URL has no host", path)]
        if url.scheme in schemes:
            return []
        return [_error(f"Expected URL to have a schema of: {', '.join(schemes)}", path)]

    return validator


_https = is_uri(["https"], False)
_http_or_https = is_uri(["http", "https"], False)
_app_uri = is_uri(["http", "https", "api", "ms-appx"], True)


def is_https_url(value: Any, path: Path = ()) -> list[Diagnostic]:
    """The value must be an https URL with a host."""
    return _https(value, path)


def is_http_or_https_url(value: Any, path: Path = ()) -> list[Diagnostic]:
    """The value must be an http or https URL with a host."""
    return _http_or_https(value, path)


def is_app_uri(value: Any, path: Path = ()) -> list[Diagnostic]:
    """The value must be an application URI or a URN."""
    return _app_uri(value, path)


def _is_uuid(value: str) -> bool:
    raw = value.encode("utf-8")
    if len(raw) != 36:
        return False
    if any(raw[i] != ord("-") for i in (8, 13, 18, 23)):
        return False
    hex_part = raw[0:8] + raw[9:13] + raw[14:18] + raw[19:23] + raw[24:36]
    return _HEX32.fullmatch(hex_part) is not None


def uuid(value: Any, path: Path = ()) -> list[Diagnostic]:
    """The value must be a UUID in 8-4-4-4-12 hexadecimal form."""
    if not isinstance(value, str):
        return _not_a_string(path)
    if not _is_uuid(value):
        return [_error("Value must be a valid UUID", path)]
    return []