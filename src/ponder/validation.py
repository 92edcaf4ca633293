"""Question text validation rules."""

from dataclasses import dataclass

QUESTION_MIN_LENGTH = 3
QUESTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating question text."""

    valid: bool
    error: str | None = None


def validate_question(text: str) -> ValidationResult:
    """Validate question text.

    Only the trimmed length matters; surrounding whitespace never changes
    the outcome.
    """
    trimmed = text.strip()

    if not trimmed:
        return ValidationResult(valid=False, error="Question cannot be empty")

    if len(trimmed) < QUESTION_MIN_LENGTH:
        return ValidationResult(
            valid=False,
            error=f"Question must be at least {QUESTION_MIN_LENGTH} characters",
        )

    if len(trimmed) > QUESTION_MAX_LENGTH:
        return ValidationResult(
            valid=False,
            error=f"Question must be less than {QUESTION_MAX_LENGTH} characters",
        )

    return ValidationResult(valid=True)
