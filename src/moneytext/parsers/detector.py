"""Transactional message detection.

Decides whether a text message comes from a bank or payment app and reads
like a transaction alert, before any field extraction is attempted.
"""

import re

from moneytext.extraction.patterns import (
    BANK_SENDER_CODES,
    CURRENCY_AMOUNT_PATTERN,
    SENDER_HEADER_PATTERNS,
    SMS_TRANSACTION_KEYWORDS,
)


class SenderDetector:
    """Recognizes bank senders and transaction-alert bodies.

    A sender qualifies if it contains a known bank/payment short code or
    looks like an operator-assigned header ("VM-HDFCBK", "JKBANK"). Plain
    phone numbers never qualify.

    Example:
        >>> detector = SenderDetector()
        >>> detector.is_transactional("VM-HDFCBK", "Rs.500 debited from A/c XX12")
        True
        >>> detector.is_transactional("+919876543210", "Rs.500 debited")
        False
    """

    def __init__(
        self,
        sender_codes: tuple[str, ...] = BANK_SENDER_CODES,
        header_patterns: tuple[re.Pattern[str], ...] = SENDER_HEADER_PATTERNS,
    ):
        self.sender_codes = sender_codes
        self.header_patterns = header_patterns

    def is_bank_sender(self, sender: str | None) -> bool:
        if not sender:
            return False
        upper = sender.upper()
        if any(code in upper for code in self.sender_codes):
            return True
        return any(pattern.search(sender) for pattern in self.header_patterns)

    def looks_like_transaction(self, body: str | None) -> bool:
        """Require a transaction keyword and a currency-marked amount."""
        if not body:
            return False
        lowered = body.lower()
        if not any(keyword in lowered for keyword in SMS_TRANSACTION_KEYWORDS):
            return False
        return CURRENCY_AMOUNT_PATTERN.search(body) is not None

    def is_transactional(self, sender: str | None, body: str | None) -> bool:
        return self.is_bank_sender(sender) and self.looks_like_transaction(body)
