"""Field extractors shared by every source adapter."""

from moneytext.extraction.amount import extract_amount, parse_amount, within_bounds
from moneytext.extraction.direction import classify_direction
from moneytext.extraction.fields import detect_payment_method, extract_balance, extract_reference
from moneytext.extraction.merchant import clean_merchant, extract_merchant

__all__ = [
    "classify_direction",
    "clean_merchant",
    "detect_payment_method",
    "extract_amount",
    "extract_balance",
    "extract_merchant",
    "extract_reference",
    "parse_amount",
    "within_bounds",
]
