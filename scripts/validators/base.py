"""Base validation utilities and error taxonomy for pipeline scripts.

This module provides the exception hierarchy shared by every stage plus the
core file checks run before processing, preventing silent failures
and improving error messages.
"""

from pathlib import Path
from typing import Any


class ValidationError(Exception):
    """Custom exception for data validation failures."""

    pass


class MalformedRecord(ValidationError):
    """A variant or truth-log line does not fit the fixed-column shape."""

    def __init__(self, file_name: str, line_number: int | None, reason: str):
        self.file_name = file_name
        self.line_number = line_number
        self.reason = reason
        where = f"{file_name} line {line_number}" if line_number else file_name
        super().__init__(f"{where}: {reason}")


class VidFormatError(ValidationError):
    """A variant identifier cannot be decomposed into chrom, pos, ref, alt."""

    pass


class EmptyComparisonInput(ValidationError):
    """Every collection handed to a set comparison was empty.

    Soft error: callers report "no data" for the comparison instead of
    numeric results.
    """

    pass


class ValidationContext:
    """Context for collecting validation errors without failing fast."""

    def __init__(self):
        self.errors: list[ValidationError] = []
        self.warnings: list[str] = []

    def validate(self, func, *args, **kwargs) -> Any:
        """Run validation function, collecting errors instead of raising.

        Returns:
            Result of validation function, or None if error occurred
        """
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            self.errors.append(e)
            return None

    def warn(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def raise_if_errors(self):
        """Raise combined error if any validations failed."""
        if self.errors:
            error_list = "\n".join(f"  {i+1}. {e}" for i, e in enumerate(self.errors))
            raise ValidationError(
                f"Validation failed with {len(self.errors)} error(s):\n{error_list}"
            )

    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0


def validate_file_exists(file_path: str | Path, file_description: str) -> Path:
    """Validate that a file exists and is readable.

    Args:
        file_path: Path to file
        file_description: Description of file for error messages

    Returns:
        Resolved Path object

    Raises:
        ValidationError: If file doesn't exist or isn't readable
    """
    path = Path(file_path)
    if not path.exists():
        raise ValidationError(f"{file_description} not found: {path}")
    if not path.is_file():
        raise ValidationError(f"{file_description} is not a file: {path}")
    return path

