"""Secondary field extractors: payment method, reference number, balance."""

from decimal import Decimal

from moneytext.config import settings
from moneytext.core.exceptions import AmountParseError
from moneytext.extraction.amount import parse_amount
from moneytext.extraction.patterns import (
    BALANCE_PATTERNS,
    PAYMENT_METHOD_PATTERNS,
    REFERENCE_PATTERNS,
)
from moneytext.schemas.enums import PaymentMethod


def detect_payment_method(text: str) -> PaymentMethod | None:
    """Infer the payment channel from rail keywords; RTGS maps to OTHER."""
    for method, pattern in PAYMENT_METHOD_PATTERNS:
        if pattern.search(text):
            return PaymentMethod(method)
    return None


def extract_reference(text: str) -> str | None:
    for pattern in REFERENCE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)[: settings.reference_max_length]
    return None


def extract_balance(text: str) -> Decimal | None:
    """Find the post-transaction available balance, if the message prints one."""
    for pattern in BALANCE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            return parse_amount(match.group(1))
        except AmountParseError:
            continue
    return None
