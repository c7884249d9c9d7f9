"""The Users service: the azuread_user and azuread_users data sources."""

from __future__ import annotations

import base64
import enum
import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .diagnostics import DiagnosticsError, error_diag, error_diag_path
from .importer import ResourceImporter, import_state_passthrough
from .resource import ResourceData, set_attribute
from .utils import response_was_not_found
from .validate import Validator, no_empty_strings, uuid


def _q(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


@dataclass
class User:
    """A directory user as returned by the graph API."""

    object_id: str | None = None
    user_principal_name: str | None = None
    mail_nickname: str | None = None
    account_enabled: bool | None = None
    display_name: str | None = None
    given_name: str | None = None
    surname: str | None = None
    immutable_id: str | None = None
    mail: str | None = None
    usage_location: str | None = None
    user_type: str | None = None
    additional_properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class _Response:
    status_code: int


class GraphError(Exception):
    """A failed request to the directory; ``response`` is None if none arrived."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.response = _Response(status_code) if status_code is not None else None


class UsersClient:
    """An in-memory user directory offering the lookups the data sources need."""

    def __init__(self, users: Iterable[User] = ()):
        self._users: list[User] = list(users)

    def add(self, user: User) -> None:
        self._users.append(user)

    def get(self, upn_or_object_id: str) -> User:
        """Return the user with this UPN or object ID; raises GraphError (404) if absent."""
        for user in self._users:
            if upn_or_object_id in (user.user_principal_name, user.object_id):
                return user
        raise GraphError(f"user {upn_or_object_id!r} does not exist", status_code=404)

    def get_by_object_id(self, object_id: str) -> User | None:
        return next((u for u in self._users if u.object_id == object_id), None)

    def get_by_mail_nickname(self, mail_nickname: str) -> User | None:
        return next((u for u in self._users if u.mail_nickname == mail_nickname), None)


class FieldType(enum.Enum):
    STRING = "string"
    BOOL = "bool"
    LIST = "list"


@dataclass(frozen=True)
class Field:
    """One attribute of a data source schema."""

    type: FieldType
    optional: bool = False
    computed: bool = False
    default: Any = None
    description: str = ""
    validator: Validator | None = None
    conflicts_with: tuple[str, ...] = ()
    exactly_one_of: tuple[str, ...] = ()
    elem: Any = None


@dataclass(frozen=True)
class DataSource:
    """A data source: its schema, its read function and its importer."""

    schema: dict[str, Field]
    read: Callable[[ResourceData, UsersClient], None]
    importer: ResourceImporter = field(
        default_factory=lambda: ResourceImporter(import_state_passthrough)
    )


def _computed(description: str = "") -> Field:
    return Field(FieldType.STRING, computed=True, description=description)


def user_data_schema() -> dict[str, Field]:
    """Schema of the azuread_user data source."""
    return {
        "object_id": Field(
            FieldType.STRING, optional=True, computed=True, validator=uuid,
            conflicts_with=("user_principal_name",),
        ),
        "user_principal_name": Field(
            FieldType.STRING, optional=True, computed=True, validator=no_empty_strings,
            conflicts_with=("object_id",),
        ),
        "mail_nickname": Field(
            FieldType.STRING, optional=True, computed=True, validator=no_empty_strings,
            conflicts_with=("object_id", "user_principal_name"),
        ),
        "account_enabled": Field(FieldType.BOOL, computed=True),
        "display_name": _computed(),
        "given_name": _computed("The given name (first name) of the user."),
        "surname": _computed("The user's surname (family name or last name)."),
        "immutable_id": _computed(),
        "mail": _computed(),
        "onpremises_sam_account_name": _computed(),
        "onpremises_user_principal_name": _computed(),
        "usage_location": _computed(),
        "job_title": _computed("The user’s job title."),
        "department": _computed("The name for the department in which the user works."),
        "company_name": _computed(
            "The company name which the user is associated. "
            "This property can be useful for describing the company that an external user comes from."
        ),
        "physical_delivery_office_name": _computed(
            "The office location in the user's place of business."
        ),
        "street_address": _computed("The street address of the user's place of business."),
        "city": _computed(
            "The city/region in which the user is located; for example, “US” or “UK”."
        ),
        "state": _computed("The state or province in the user's address."),
        "country": _computed(
            "The country/region in which the user is located; for example, “US” or “UK”."
        ),
        "postal_code": _computed(
            "The postal code for the user's postal address. The postal code is specific to the "
            "user's country/region. In the United States of America, this attribute contains the ZIP code."
        ),
        "mobile": _computed("The primary cellular telephone number for the user."),
        "user_type": _computed(
            "Whether the user is homed in the current tenant or a guest user invited from another tenant."
        ),
    }


_SELECTORS = ("object_ids", "user_principal_names", "mail_nicknames")


def users_data_schema() -> dict[str, Field]:
    """Schema of the azuread_users data source."""
    user_fields = {
        "account_enabled": Field(FieldType.BOOL, computed=True),
        **{
            name: _computed()
            for name in (
                "display_name", "immutable_id", "mail", "mail_nickname", "object_id",
                "onpremises_sam_account_name", "onpremises_user_principal_name",
                "usage_location", "user_principal_name",
            )
        },
    }
    return {
        "object_ids": Field(
            FieldType.LIST, optional=True, computed=True, exactly_one_of=_SELECTORS,
            elem=Field(FieldType.STRING, validator=uuid),
        ),
        "user_principal_names": Field(
            FieldType.LIST, optional=True, computed=True, exactly_one_of=_SELECTORS,
            elem=Field(FieldType.STRING, validator=no_empty_strings),
        ),
        "mail_nicknames": Field(
            FieldType.LIST, optional=True, computed=True, exactly_one_of=_SELECTORS,
            elem=Field(FieldType.STRING, validator=no_empty_strings),
        ),
        "ignore_missing": Field(FieldType.BOOL, optional=True, default=False),
        "users": Field(FieldType.LIST, computed=True, elem=user_fields),
    }


_EXTRA_STRING_FIELDS = {
    "job_title": "jobTitle",
    "department": "department",
    "company_name": "companyName",
    "physical_delivery_office_name": "physicalDeliveryOfficeName",
    "street_address": "streetAddress",
    "city": "city",
    "state": "state",
    "country": "country",
    "postal_code": "postalCode",
    "mobile": "mobile",
}


def _nonempty_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def user_data_read(d: ResourceData, client: UsersClient) -> None:
    """Look up a single user and fill ``d``; raises DiagnosticsError on failure."""
    upn = _nonempty_str(d.get("user_principal_name"))
    object_id = _nonempty_str(d.get("object_id"))
    mail_nickname = _nonempty_str(d.get("mail_nickname"))

    if upn is not None:
        try:
            user = client.get(upn)
        except GraphError as err:
            if response_was_not_found(err.response):
                raise DiagnosticsError(
                    error_diag(None, "User with UPN {} was not found", _q(upn))
                ) from err
            raise DiagnosticsError(
                error_diag(err, "Retrieving user with UPN: {}", _q(upn))
            ) from err
    elif object_id is not None:
        try:
            found = client.get_by_object_id(object_id)
        except GraphError as err:
            raise DiagnosticsError(
                error_diag(err, "Finding user with object ID: {}", _q(object_id))
            ) from err
        if found is None:
            raise DiagnosticsError(error_diag_path(
                None, "object_id", "User not found with object ID: {}", _q(object_id)
            ))
        user = found
    elif mail_nickname is not None:
        try:
            found = client.get_by_mail_nickname(mail_nickname)
        except GraphError as err:
            raise DiagnosticsError(error_diag_path(
                err, "mail_nickname", "Finding user with email alias: {}", _q(mail_nickname)
            )) from err
        if found is None:
            raise DiagnosticsError(error_diag_path(
                None, "mail_nickname", "User not found with email alias: {}", _q(mail_nickname)
            ))
        user = found
    else:
        raise DiagnosticsError(error_diag(
            None, "One of `object_id`, `user_principal_name` and `mail_nickname` must be supplied"
        ))

    if user.object_id is None:
        raise DiagnosticsError(
            error_diag(ValueError("Object ID returned for user is nil"), "Bad API response")
        )

    d.id = user.object_id
    props = user.additional_properties
    values = {
        "account_enabled": user.account_enabled,
        "display_name": user.display_name,
        "given_name": user.given_name,
        "immutable_id": user.immutable_id,
        "mail": user.mail,
        "mail_nickname": user.mail_nickname,
        "object_id": user.object_id,
        "onpremises_sam_account_name": props.get("onPremisesSamAccountName"),
        "onpremises_user_principal_name": props.get("onPremisesUserPrincipalName"),
        "surname": user.surname,
        "usage_location": user.usage_location,
        "user_principal_name": user.user_principal_name,
        "user_type": user.user_type,
    }
    values.update({attr: props.get(key, "") for attr, key in _EXTRA_STRING_FIELDS.items()})
    for attr, value in values.items():
        set_attribute(d, attr, value)


def _list_of(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def users_data_read(d: ResourceData, client: UsersClient) -> None:
    """Look up several users and fill ``d``; raises DiagnosticsError on failure."""
    ignore_missing = bool(d.get("ignore_missing"))
    users: list[User] = []
    expected = 0

    upns_in = _list_of(d.get("user_principal_names"))
    object_ids_in = _list_of(d.get("object_ids"))
    nicknames_in = _list_of(d.get("mail_nicknames"))

    if upns_in:
        expected = len(upns_in)
        for upn in upns_in:
            try:
                users.append(client.get(upn))
            except GraphError as err:
                if ignore_missing and response_was_not_found(err.response):
                    continue
                raise DiagnosticsError(error_diag_path(
                    err, "user_principal_names", "Retrieving user with UPN: {}", _q(upn)
                )) from err
    elif object_ids_in:
        expected = len(object_ids_in)
        for object_id in object_ids_in:
            try:
                found = client.get_by_object_id(object_id)
            except GraphError as err:
                raise DiagnosticsError(error_diag_path(
                    err, "object_ids", "Finding user with object ID: {}", _q(object_id)
                )) from err
            if found is None:
                if ignore_missing:
                    continue
                raise DiagnosticsError(error_diag_path(
                    None, "object_ids", "User not found with object ID: {}", _q(object_id)
                ))
            users.append(found)
    elif nicknames_in:
        expected = len(nicknames_in)
        for nickname in nicknames_in:
            try:
                found = client.get_by_mail_nickname(nickname)
            except GraphError as err:
                raise DiagnosticsError(error_diag_path(
                    err, "mail_nicknames", "Finding user with email alias: {}", _q(nickname)
                )) from err
            if found is None:
                if ignore_missing:
                    continue
                raise DiagnosticsError(error_diag_path(
                    None, "mail_nicknames", "User not found with email alias: {}", _q(nickname)
                ))
            users.append(found)

    if not ignore_missing and len(users) != expected:
        raise DiagnosticsError(error_diag(
            ValueError(f"Expected: {expected}, Actual: {len(users)}"),
            "Unexpected number of users returned",
        ))

    upns: list[str] = []
    object_ids: list[str] = []
    mail_nicknames: list[str] = []
    user_list: list[dict[str, Any]] = []
    for u in users:
        if u.object_id is None or u.user_principal_name is None:
            raise DiagnosticsError(error_diag(
                ValueError("API returned user with nil object ID"), "Bad API Response"
            ))
        object_ids.append(u.object_id)
        upns.append(u.user_principal_name)
        if u.mail_nickname is not None:
            mail_nicknames.append(u.mail_nickname)
        user_list.append({
            "account_enabled": u.account_enabled,
            "display_name": u.display_name,
            "immutable_id": u.immutable_id,
            "mail": u.mail,
            "mail_nickname": u.mail_nickname,
            "object_id": u.object_id,
            "onpremises_sam_account_name": u.additional_properties.get("onPremisesSamAccountName"),
            "onpremises_user_principal_name": u.additional_properties.get(
                "onPremisesUserPrincipalName"
            ),
            "usage_location": u.usage_location,
            "user_principal_name": u.user_principal_name,
        })

    digest = hashlib.sha1("-".join(upns).encode("utf-8")).digest()
    d.id = "users#" + base64.urlsafe_b64encode(digest).decode("ascii")

    set_attribute(d, "object_ids", object_ids)
    set_attribute(d, "mail_nicknames", mail_nicknames)
    set_attribute(d, "user_principal_names", upns)
    set_attribute(d, "users", user_list)


class Registration:
    """Registers the data sources of the Users service."""

    def name(self) -> str:
        return "Users"

    def website_categories(self) -> list[str]:
        return ["Users"]

    def supported_data_sources(self) -> dict[str, DataSource]:
        return {
            "azuread_user": DataSource(user_data_schema(), user_data_read),
            "azuread_users": DataSource(users_data_schema(), users_data_read),
        }