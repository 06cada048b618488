"""Checks for the optional ``navigation`` block attached to a scene."""

from typing import Any

from validators.diagnostics import Diagnostics
from validators.fields import category_of, require_object


def validate_navigation(navigation: Any, path: str, diagnostics: Diagnostics) -> str | None:
    """Validate a navigation descriptor found at *path*.

    Returns:
        The ``next`` target when it is a well-formed string, else ``None``.
        Whether that target names a real scene is left to the caller, which
        has seen the whole scene list.
    """
    if not require_object(navigation, path, diagnostics):
        return None

    if "next" not in navigation:
        return None

    target = navigation["next"]
    if not isinstance(target, str):
        diagnostics.error(
            f"{path}.next",
            f'Navigation next must be a string (scene ID or "end"), got {category_of(target)}',
            "invalid_type",
        )
        return None
    return target
