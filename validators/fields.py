"""Presence and primitive-type checks for fields of untrusted JSON objects.

Categories follow JSON rather than Python: a list is an ``array`` (never an
``object``), a bool is a ``boolean`` (never a ``number``) and ``None`` is
``null``.  Confusing arrays with objects would hide exactly the shape errors
generated content tends to have, e.g. a metadata list where an object is
expected.
"""

from collections.abc import Mapping
from typing import Any, Literal

from validators.diagnostics import Diagnostics

Category = Literal["string", "array", "object"]


def category_of(value: Any) -> str:
    """Return the JSON category name of *value*."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def join_path(parent: str, field: str) -> str:
    return f"{parent}.{field}" if parent else field


def is_present(obj: Mapping, field: str) -> bool:
    """True when *field* exists on *obj* with a non-null value."""
    return obj.get(field) is not None


def require_object(value: Any, path: str, diagnostics: Diagnostics) -> bool:
    """Report *value* at *path* unless it is a JSON object."""
    if isinstance(value, Mapping):
        return True
    diagnostics.error(
        path,
        f"Expected an object, got {category_of(value)}",
        "invalid_type",
    )
    return False


def require_field(
    obj: Mapping,
    field: str,
    expected: Category,
    diagnostics: Diagnostics,
    parent_path: str = "",
) -> bool:
    """Check that *obj* has *field* of category *expected*.

    Returns:
        ``True`` when the field exists with the expected category, so callers
        can skip checks that depend on it.  Failures are recorded on
        *diagnostics*; nothing is raised.
    """
    path = join_path(parent_path, field)

    if field not in obj:
        diagnostics.error(path, f"Required field '{field}' is missing", "missing")
        return False

    value = obj[field]
    actual = category_of(value)
    if actual != expected:
        diagnostics.error(
            path,
            f"Field '{field}' must be of type {expected}, got {actual}",
            "invalid_type",
        )
        return False

    if expected == "string" and not value.strip():
        diagnostics.warning(path, f"Field '{field}' is empty", "best_practice")

    return True
