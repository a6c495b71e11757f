"""Debit/credit direction classification."""

from moneytext.extraction.patterns import CREDIT_PATTERNS, DEBIT_PATTERNS
from moneytext.schemas.enums import TransactionDirection


def keyword_counts(text: str) -> tuple[int, int]:
    """Count distinct debit and credit keywords present in ``text``."""
    debit = sum(1 for pattern in DEBIT_PATTERNS if pattern.search(text))
    credit = sum(1 for pattern in CREDIT_PATTERNS if pattern.search(text))
    return debit, credit


def classify_direction(text: str) -> TransactionDirection:
    """Decide whether money left or entered the account.

    CREDIT only when credit keywords strictly outnumber debit keywords;
    ties (including no keywords at all) resolve to DEBIT.
    """
    debit, credit = keyword_counts(text)
    if credit > debit:
        return TransactionDirection.CREDIT
    return TransactionDirection.DEBIT
