"""Per-call collector for validation errors and warnings."""

from models.validation import (
    ErrorKind,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    WarningKind,
)


class Diagnostics:
    """Mutable error/warning lists for a single validation call.

    Create one per call and freeze it with :meth:`result`; instances are
    never shared between calls, so concurrent validations cannot interleave.
    """

    def __init__(self) -> None:
        self._errors: list[ValidationError] = []
        self._warnings: list[ValidationWarning] = []

    def error(self, path: str, message: str, kind: ErrorKind) -> None:
        self._errors.append(ValidationError(path=path, message=message, kind=kind))

    def warning(self, path: str, message: str, kind: WarningKind) -> None:
        self._warnings.append(
            ValidationWarning(path=path, message=message, kind=kind)
        )

    def result(self) -> ValidationResult:
        return ValidationResult(
            errors=tuple(self._errors),
            warnings=tuple(self._warnings),
        )
