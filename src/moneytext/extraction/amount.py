"""Monetary amount extraction from free text."""

import logging
import re
from decimal import Decimal, InvalidOperation

from moneytext.config import settings
from moneytext.core.exceptions import AmountParseError
from moneytext.extraction.patterns import AMOUNT_PATTERNS

logger = logging.getLogger(__name__)


def parse_amount(text: str) -> Decimal:
    """Parse a printed amount into a Decimal.

    Handles:
        - 1,23,456.00 (Indian grouping)
        - ₹500 / Rs. 500 / INR 500
        - 1234.5 Dr / (1,234.56) / 123.45-

    Args:
        text: Amount string

    Returns:
        Amount as Decimal (sign markers are dropped)

    Raises:
        AmountParseError: If the amount cannot be parsed
    """
    raw = text.strip()
    raw = re.sub(r"(?i)\b(cr|dr)\b\.?", "", raw).strip()
    raw = raw.replace("(", "").replace(")", "").strip().strip("-").strip()
    raw = re.sub(r"(?i)^(?:rs\.?|inr)|₹", "", raw)
    cleaned = re.sub(r"[\s,]", "", raw)

    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise AmountParseError({"text": text}) from e

    if not value.is_finite():
        raise AmountParseError({"text": text})
    return value


def within_bounds(amount: Decimal) -> bool:
    """Check an amount against the configured plausibility bounds."""
    return settings.min_amount <= amount <= settings.max_amount


def extract_amount(text: str) -> Decimal | None:
    """Find the transaction amount in a message.

    Amount patterns are tried in priority order (currency-prefixed,
    currency-suffixed, "amount:" labels, verb-adjacent figures) and the
    first pattern that matches decides. If its figure does not parse or is
    not positive the message has no usable amount; later patterns are not
    consulted.

    Args:
        text: Message text

    Returns:
        Positive amount, or None when the first match is unusable or nothing matches
    """
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            value = parse_amount(match.group(1))
        except AmountParseError:
            logger.debug("Amount candidate rejected", extra={"error_code": "EXTRACT_001"})
            return None
        return value if value > 0 else None
    return None
