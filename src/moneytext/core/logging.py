"""Logging configuration with PII filtering.

Message bodies routinely contain account numbers, card numbers and phone
numbers. Everything the package logs goes through ``PIIFilter`` so those
never reach a log sink, whichever formatter is active.

Library modules only call ``logging.getLogger(__name__)``; entrypoints call
``configure_logging()`` once.
"""

import json
import logging
import re
import sys
from typing import IO

from moneytext.config import settings

_PKG_LOGGER_NAME = "moneytext"

# PII patterns to filter from logs
PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[CARD]"),
    # Masked account numbers as printed in alerts (XXXX1234, xx5678, **9012)
    (re.compile(r"(?i)\b[x*]{2,}\d{2,6}\b"), "[ACCOUNT]"),
    # Email addresses / UPI handles
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\b"), "[EMAIL]"),
    # PAN card (5 letters, 4 digits, 1 letter)
    (re.compile(r"\b[A-Z]{5}\d{4}[A-Z]\b"), "[PAN]"),
    # Indian mobile numbers with optional country code
    (re.compile(r"(?:\+91[\s-]?)?\b[6-9]\d{9}\b"), "[PHONE]"),
]


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class PIIFilter(logging.Filter):
    """Scrub PII from the rendered message before any handler sees it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = filter_pii(record.getMessage())
        record.args = None
        return True


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    _EXTRA_FIELDS = (
        "request_id",
        "method",
        "path",
        "status_code",
        "duration_ms",
        "error_code",
        "source",
        "found",
        "inserted",
        "skipped",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for field in self._EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


def configure_logging(
    level: int | str | None = None,
    *,
    json_output: bool | None = None,
    stream: IO[str] = sys.stderr,
) -> logging.Logger:
    """Attach a single PII-filtered handler to the package logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.

    Args:
        level: Logging level; defaults to ``settings.log_level``
        json_output: Use ``JSONLogFormatter``; defaults to ``settings.log_json``
        stream: Output stream for the handler

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    resolved = level if level is not None else settings.log_level
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.strip().upper())
    logger.setLevel(resolved)

    for handler in list(logger.handlers):
        if getattr(handler, "_moneytext", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler._moneytext = True  # type: ignore[attr-defined]
    use_json = settings.log_json if json_output is None else json_output
    if use_json:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    handler.addFilter(PIIFilter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
