"""Custom exception classes for transaction extraction.

This module defines a hierarchy of exceptions used throughout the
extraction pipeline. Each exception maps to a specific error code
defined in errors.py.

Source adapters catch these per item and drop the item; they are never
allowed to escape a batch.
"""

from typing import Any


class ExtractionError(Exception):
    """Base exception for all extraction errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "EXTRACT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 400)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 400,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: 400)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class AmountParseError(ExtractionError):
    """Raised when a matched amount is not a usable positive number."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("EXTRACT_001", details)


class DateParseError(ExtractionError):
    """Raised when no supported date format matches a statement date."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("EXTRACT_002", details)


class BodyDecodeError(ExtractionError):
    """Raised when an email body part cannot be decoded."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("EXTRACT_003", details)


class StatementFileError(ExtractionError):
    """Raised when a statement file cannot be read at the byte level.

    Common causes:
    - Corrupted PDF (FILE_001)
    - Password-protected PDF without a valid password (FILE_002)
    - Unsupported file type (FILE_003)
    """

    pass
