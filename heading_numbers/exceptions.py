"""Package-specific exception types."""

from __future__ import annotations


class NumberingError(ValueError):
    """Base class for heading-numbers errors."""


class ProcessFileError(NumberingError):
    """Raised when a Markdown file cannot be numbered or cleared.

    Args:
        filepath: Path of the file that failed.
        reason: Human-readable description of the failure.
    """

    def __init__(self, filepath: object, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"{filepath}: {reason}")
