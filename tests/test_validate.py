import pytest

from aadusers.diagnostics import Severity
from aadusers.validate import (
    UUID_PATTERN,
    is_app_uri,
    is_http_or_https_url,
    is_https_url,
    is_uri,
    no_empty_strings,
    string_is_email_address,
    uuid,
    validate_diag,
)


@pytest.mark.parametrize(
    "value, err_count",
    [
        ("!", 0),
        (".", 0),
        ("-", 0),
        ("_", 0),
        ("10.1.0.0/16", 0),
        ("", 1),
        (" ", 1),
        ("     ", 1),
        ("  1", 0),
        ("1 ", 0),
        ("\r", 1),
        ("\n", 1),
        ("\t", 1),
        ("\f", 1),
        ("\v", 1),
    ],
)
def test_no_empty_strings(value, err_count):
    assert len(no_empty_strings(value, ())) == err_count


def test_no_empty_strings_non_string():
    diags = no_empty_strings(5, ("name",))
    assert len(diags) == 1
    assert diags[0].summary == "Expected a string value"
    assert diags[0].attribute_path == ("name",)


@pytest.mark.parametrize(
    "value, err_count",
    [
        ("j.doe@example.com", 0),
        ("j.doeexample.com", 1),
        ("j/doe@ex$ample.com", 1),
    ],
)
def test_string_is_email_address(value, err_count):
    assert len(string_is_email_address(value, ())) == err_count


def test_string_is_email_address_empty_reports_both():
    summaries = [d.summary for d in string_is_email_address("", ())]
    assert summaries == ["Value must not be empty", "Value must be a valid email address"]


def test_string_is_email_rejects_trailing_newline():
    assert len(string_is_email_address("j.doe@example.com\n", ())) == 1


HTTPS_CASES = [
    ("", 1),
    ("this is not a url", 1),
    ("www.example.com", 1),
    ("ftp://www.example.com", 1),
    ("http://www.example.com", 1),
    ("https://www.example.com", 0),
]


@pytest.mark.parametrize("url, errors", HTTPS_CASES)
def test_is_https_url(url, errors):
    assert len(is_https_url(url, ())) == errors


@pytest.mark.parametrize(
    "url, errors",
    [
        ("", 1),
        ("this is not a url", 1),
        ("www.example.com", 1),
        ("ftp://www.example.com", 1),
        ("http://www.example.com", 0),
        ("https://www.example.com", 0),
    ],
)
def test_is_http_or_https_url(url, errors):
    assert len(is_http_or_https_url(url, ())) == errors


@pytest.mark.parametrize(
    "url, errors",
    [
        ("", 1),
        ("this is not a url", 1),
        ("www.example.com", 1),
        ("ftp://www.example.com", 1),
        ("http://www.example.com", 0),
        ("https://www.example.com", 0),
        ("api://www.example.com", 0),
        ("urn:uuid:6e8bc430-9c3a-11d9-9669-0800200c9a66", 0),
        ("urn:nbn:de:bvb:19-146642", 0),
        ("ms-appx://www.example.com", 0),
    ],
)
def test_is_app_uri(url, errors):
    assert len(is_app_uri(url, ())) == errors


def test_uri_summaries():
    assert is_https_url("", ())[0].summary == "URL must not be empty"
    assert is_https_url("www.example.com", ())[0].summary == "URL has no host"
    assert (
        is_http_or_https_url("ftp://www.example.com", ())[0].summary
        == "Expected URL to have a schema of: http, https"
    )


def test_uri_invalid_format_has_detail():
    diags = is_https_url("https://www.example.com:port", ("url",))
    assert diags[0].summary == "URL is in an invalid format"
    assert diags[0].detail
    assert diags[0].attribute_path == ("url",)


def test_urn_rejected_when_not_allowed():
    validator = is_uri(["https"], False)
    assert len(validator("urn:nbn:de:bvb:19-146642", ())) == 1


@pytest.mark.parametrize(
    "value, errors",
    [
        ("", 1),
        ("hello-world", 1),
        ("00000000-0000-111-0000-000000000000", 1),
        ("00000000-0000-0000-0000-000000000000", 0),
    ],
)
def test_uuid(value, errors):
    assert len(uuid(value, ())) == errors


def test_uuid_rejects_non_hex():
    assert uuid("0000000g-0000-0000-0000-000000000000", ())[0].summary == "Value must be a valid UUID"


def test_uuid_pattern_requires_version_four():
    assert UUID_PATTERN.match("6e8bc430-9c3a-41d9-9669-0800200c9a66")
    assert not UUID_PATTERN.match("6e8bc430-9c3a-11d9-9669-0800200c9a66")


def test_validate_diag_converts_warnings_and_errors():
    seen = []

    def legacy(value, key):
        seen.append((value, key))
        return ["be careful"], [ValueError("bad value")]

    diags = validate_diag(legacy)("input", ("a", "b"))
    assert [d.severity for d in diags] == [Severity.WARNING, Severity.ERROR]
    assert [d.summary for d in diags] == ["be careful", "bad value"]
    assert seen[0][0] == "input"
    assert "a" in seen[0][1] and "b" in seen[0][1]


def test_validate_diag_clean_value_has_no_diagnostics():
    assert validate_diag(lambda value, key: ([], []))("ok", ()) == []