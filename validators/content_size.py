"""Serialized-size advisories for manifests and scenes.

Oversized content still renders but loads slowly on municipal networks, so
these only ever produce ``performance`` warnings.
"""

import json
from typing import Any

from app.utils.logging import get_logger
from validators.diagnostics import Diagnostics

logger = get_logger("validators.content_size")


def serialized_size(value: Any) -> int | None:
    """Return the UTF-8 JSON size of *value* in bytes.

    ``None`` when *value* cannot be encoded: circular references, non-JSON
    types, or nesting deep enough to exhaust the recursion limit.
    """
    try:
        return len(json.dumps(value, ensure_ascii=False).encode("utf-8"))
    except (ValueError, TypeError, RecursionError) as exc:
        logger.debug("content_size_skipped", reason=type(exc).__name__)
        return None


def check_size(
    value: Any, path: str, limit: int, label: str, diagnostics: Diagnostics
) -> None:
    """Warn at *path* when *value* serializes to more than *limit* bytes."""
    size = serialized_size(value)
    if size is not None and size > limit:
        diagnostics.warning(
            path,
            f"{label} size {size} bytes exceeds limit of {limit} bytes",
            "performance",
        )
