# aadusers

Reads directory users into resource state. It also provides the validators,
diagnostics and small utilities that go with this.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `aadusers.users`
  - `User` is a dataclass for a directory user. Its `additional_properties`
    dict holds the extra fields, such as `jobTitle` and `onPremisesSamAccountName`.
  - `UsersClient` is an in-memory directory of `User` records. It offers
    `add`, `get` (by user principal name or object ID), `get_by_object_id` and
    `get_by_mail_nickname`. `get` raises `GraphError` with a 404 response when
    the user is absent.
  - `user_data_read(d, client)` looks up a single user by
    `user_principal_name`, `object_id` or `mail_nickname`, in that order of
    preference, and fills a `ResourceData`.
  - `users_data_read(d, client)` looks up several users by
    `user_principal_names`, `object_ids` or `mail_nicknames`. It honours
    `ignore_missing`. It sets the ID to `users#` followed by the URL-safe
    base64 SHA-1 of the user principal names joined with `-`.
  - Both read functions raise `DiagnosticsError` on failure.
  - `user_data_schema()` and `users_data_schema()` describe the attributes as
    `Field` entries.
  - `Registration` names the service (`name()`, `website_categories()`) and
    maps `azuread_user` and `azuread_users` to `DataSource` entries
    (`supported_data_sources()`).
- `aadusers.validate`
  - Validators: `no_empty_strings`, `string_is_email_address`, `uuid`,
    `is_https_url`, `is_http_or_https_url` and `is_app_uri`.
  - `is_uri(valid_schemes, urn_allowed)` builds a URL validator.
  - `validate_diag` wraps a function that returns a pair
    `(warnings, errors)` as a validator.
  - Every validator takes `(value, path)` and returns a list of `Diagnostic`
    entries. An empty list means the value is valid.
- `aadusers.diagnostics`
  - `Severity`, `Diagnostic` and `DiagnosticsError`.
  - The builders `error_diag`, `error_diag_path`, `import_as_duplicate_diag`
    and `import_as_exists_diag`.
- `aadusers.resource`
  - `ResourceData` holds an `id` and attribute values, with `get` and `set`.
    It can optionally be restricted to a set of schema keys. Setting an
    unknown key then raises `KeyError`.
  - `set_attribute` returns diagnostics instead of raising.
- `aadusers.importer`
  - `ResourceImporter` and `import_state_passthrough`.
  - `validate_resource_id_prior_to_import` and
    `validate_resource_id_prior_to_import_then` build importers that run an ID
    check first. They raise `ResourceIdError` when the check raises.
- `aadusers.locks`
  - `MutexKV` is a store of per-key locks, with `lock`, `unlock` and `locked`.
  - `lock_by_name` and `unlock_by_name` use a shared store keyed by
    `"<type>.<name>"`.
- `aadusers.utils`
  - `response_was_status_code`, `response_was_not_found` and `difference`.
- `aadusers.marshall`
  - `expand_string_list` and `flatten_string_list`.
- `aadusers.acctest`
  - `acc_rand_time_int()` returns an 18-digit integer. It is built from the
    local time (`YYMMddHHmmss` plus hundredths of a second) followed by 4
    random digits.

## Example

```python
from aadusers.validate import is_https_url, uuid

assert is_https_url("https://www.example.com", ()) == []
problems = uuid("hello-world", ("object_id",))
print(problems[0].summary)  # Value must be a valid UUID
```

```python
from aadusers.resource import ResourceData
from aadusers.users import User, UsersClient, user_data_read, users_data_read

client = UsersClient([
    User(object_id="00000000-0000-0000-0000-000000000001",
         user_principal_name="alice@example.com", mail_nickname="alice",
         display_name="Alice"),
])

d = ResourceData({"user_principal_name": "alice@example.com"})
user_data_read(d, client)
print(d.id, d.get("display_name"))

many = ResourceData({"mail_nicknames": ["alice", "nobody"], "ignore_missing": True})
users_data_read(many, client)
print(many.get("user_principal_names"))  # ['alice@example.com']
```

## What it does not do

There is no connection to a live directory service. `UsersClient` only
searches the `User` records it is given. The package also has no command
line, and it does not create, update or delete users.