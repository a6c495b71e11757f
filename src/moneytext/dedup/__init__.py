"""Duplicate detection for repeated imports."""

from moneytext.dedup.fingerprint import build_fingerprint, fingerprint_batch, normalize_key_text
from moneytext.dedup.store import InMemoryTransactionStore, TransactionStore

__all__ = [
    "InMemoryTransactionStore",
    "TransactionStore",
    "build_fingerprint",
    "fingerprint_batch",
    "normalize_key_text",
]
