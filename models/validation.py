"""Pydantic models for validation diagnostics and results.

A result is produced once per validation call and is frozen afterwards;
errors and warnings are stored as tuples in the order they were found.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

ErrorKind = Literal["missing", "invalid_type", "invalid_value", "structure"]
WarningKind = Literal["deprecated", "performance", "best_practice"]


class ValidationError(BaseModel):
    """A structural problem that makes the manifest unsafe to run."""

    model_config = ConfigDict(frozen=True)

    path: str
    """Dotted/bracketed address into the document, e.g. ``scenes[2].dialogue_turns[0].speaker``."""

    message: str

    kind: ErrorKind

    def __str__(self) -> str:
        return f"{self.path}: {self.message} ({self.kind})"


class ValidationWarning(BaseModel):
    """A quality signal. Never affects :attr:`ValidationResult.is_valid`."""

    model_config = ConfigDict(frozen=True)

    path: str
    message: str
    kind: WarningKind

    def __str__(self) -> str:
        return f"{self.path}: {self.message} ({self.kind})"


class ValidationResult(BaseModel):
    """Outcome of one validation call."""

    model_config = ConfigDict(frozen=True)

    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()

    @computed_field(alias="isValid")
    @property
    def is_valid(self) -> bool:
        return not self.errors


class ContentLimits(BaseModel):
    """Size and length limits behind the performance/best-practice warnings.

    Byte limits are measured on the UTF-8 JSON encoding of the value.
    """

    model_config = ConfigDict(frozen=True)

    max_manifest_bytes: int = Field(default=500 * 1024, gt=0)
    max_dialogue_scene_bytes: int = Field(default=50 * 1024, gt=0)
    max_quiz_scene_bytes: int = Field(default=30 * 1024, gt=0)

    max_turn_text_chars: int = Field(default=500, gt=0)
    """Dialogue turns longer than this are hard to read on small screens."""

    max_quiz_questions: int = Field(default=10, gt=0)
    """Quizzes with more questions overrun a short session."""
