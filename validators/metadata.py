"""Validator for the manifest-level ``metadata`` block.

Required fields are structural errors.  Two quality rules only warn:
  - language not in the supported set (unknown languages still render),
  - duration not written as "<n> minutes".
Neither blocks the manifest; they flag content for human review.
"""

import re
from collections.abc import Iterable, Mapping

from app.utils.logging import get_logger
from validators.diagnostics import Diagnostics
from validators.fields import require_field

logger = get_logger("validators.metadata")

_PATH = "metadata"

REQUIRED_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "duration",
    "targetAudience",
    "language",
)

SUPPORTED_LANGUAGES: frozenset[str] = frozenset({"sv", "de", "fr", "nl", "en"})

DURATION_PATTERN = re.compile(r"\d+\s*(minutes?|mins?)", re.IGNORECASE)


class MetadataValidator:
    """Checks required metadata fields and applies the soft quality rules."""

    def __init__(self, supported_languages: Iterable[str] | None = None) -> None:
        self.supported_languages: frozenset[str] = (
            frozenset(supported_languages)
            if supported_languages is not None
            else SUPPORTED_LANGUAGES
        )

    def validate(self, metadata: Mapping, diagnostics: Diagnostics) -> None:
        for field in REQUIRED_FIELDS:
            require_field(metadata, field, "string", diagnostics, _PATH)

        language = metadata.get("language")
        if isinstance(language, str) and language and language not in self.supported_languages:
            diagnostics.warning(
                f"{_PATH}.language",
                f"Language '{language}' might not be fully supported",
                "best_practice",
            )
            logger.warning(
                "unsupported_language",
                language=language,
                supported=sorted(self.supported_languages),
            )

        duration = metadata.get("duration")
        if isinstance(duration, str) and duration and not DURATION_PATTERN.fullmatch(duration):
            diagnostics.warning(
                f"{_PATH}.duration",
                'Duration should be in format "X minutes"',
                "best_practice",
            )
