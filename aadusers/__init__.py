"""Directory user lookups, validators, diagnostics and resource state helpers."""

__version__ = "0.1.0"

__all__ = [
    "acctest",
    "diagnostics",
    "importer",
    "locks",
    "marshall",
    "resource",
    "users",
    "utils",
    "validate",
]