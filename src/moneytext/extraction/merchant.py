"""Counterparty (merchant/payee) extraction."""

import re

from moneytext.config import settings
from moneytext.extraction.patterns import (
    EXCLUDED_SENDER_MARKERS,
    KNOWN_MERCHANT_PATTERNS,
    MERCHANT_MAX_CANDIDATE_LENGTH,
    MERCHANT_MIN_LENGTH,
    MERCHANT_PATTERNS,
    MERCHANT_STOPWORDS,
)


def clean_merchant(name: str) -> str:
    """Collapse whitespace, strip noise characters and bound the length."""
    name = re.sub(r"[^A-Za-z0-9\s&.@_'\-]", " ", name)
    name = " ".join(name.split())
    name = name.strip(" .-_'")
    return name[: settings.merchant_max_length].strip()


def _is_candidate(name: str) -> bool:
    if not MERCHANT_MIN_LENGTH <= len(name) <= MERCHANT_MAX_CANDIDATE_LENGTH:
        return False
    first = name.split()[0].lower()
    return first not in MERCHANT_STOPWORDS and name.lower() not in MERCHANT_STOPWORDS


def sender_display_name(sender: str | None) -> str | None:
    """Reduce a From header to a display name usable as a merchant.

    Automated senders (noreply, alerts) are ignored.
    """
    if not sender:
        return None
    name = re.sub(r"<[^>]*>", "", sender)
    name = re.sub(r"@\S*", "", name)
    name = name.replace('"', "").replace("'", "").strip()
    lowered = name.lower()
    if not name or any(marker in lowered for marker in EXCLUDED_SENDER_MARKERS):
        return None
    name = clean_merchant(name)
    return name if len(name) >= MERCHANT_MIN_LENGTH else None


def extract_merchant(text: str, sender: str | None = None) -> str | None:
    """Find the counterparty named in a message.

    Tries the merchant patterns in order ("to/at/from X", UPI addresses,
    "paid to X", rail narrations like NEFT/ref/NAME/), then the table of
    well-known merchants, then the sender's display name.

    Args:
        text: Message or narration text
        sender: Optional From header used as the last fallback

    Returns:
        Cleaned merchant name (original casing kept), or None
    """
    for pattern in MERCHANT_PATTERNS:
        for match in pattern.finditer(text):
            candidate = " ".join(match.group(1).split())
            if _is_candidate(candidate):
                cleaned = clean_merchant(candidate)
                if len(cleaned) >= MERCHANT_MIN_LENGTH:
                    return cleaned

    for name, pattern in KNOWN_MERCHANT_PATTERNS:
        if pattern.search(text):
            return name

    return sender_display_name(sender)
