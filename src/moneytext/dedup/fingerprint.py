"""Stable fingerprints for duplicate detection across imports.

Two records share a fingerprint when they come from the same source, fall
in the same timestamp bucket, carry the same amount (to the paisa) and
direction, and name the same counterparty (or, lacking a merchant, start
with the same text). A reference number or running balance, when the
source prints one, is part of the key too, so two same-day purchases of
the same amount at the same payee stay distinct.

Records that are still identical within one batch are numbered by
occurrence (``fingerprint_batch``). Re-scanning a message store or
re-importing a statement reproduces the same numbering and therefore the
same keys.
"""

import hashlib
import re
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from moneytext.config import settings
from moneytext.schemas.transaction import TransactionRecord

# Characters of the normalized merchant/text kept in the key.
KEY_TEXT_LENGTH = 24

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def normalize_key_text(text: str | None) -> str:
    """Upper-case alphanumerics only, truncated to ``KEY_TEXT_LENGTH``."""
    return _NON_ALNUM.sub("", (text or "").upper())[:KEY_TEXT_LENGTH]


def timestamp_bucket(timestamp: int, granularity_minutes: int) -> int:
    granularity_ms = max(granularity_minutes, 1) * 60_000
    return timestamp // granularity_ms


def _money(value: Decimal) -> str:
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def build_fingerprint(
    record: TransactionRecord,
    granularity_minutes: int | None = None,
    occurrence: int = 0,
) -> str:
    """Compute the deduplication key for a record.

    Args:
        record: Parsed transaction
        granularity_minutes: Timestamp bucket size (default: settings)
        occurrence: Index among identical records of the same batch

    Returns:
        64-character hex SHA-256 digest
    """
    granularity = (
        settings.dedup_granularity_minutes if granularity_minutes is None else granularity_minutes
    )
    parts = [
        record.source.value,
        str(timestamp_bucket(record.timestamp, granularity)),
        _money(record.amount),
        record.direction.value,
        normalize_key_text(record.merchant or record.raw_text),
    ]
    if record.reference_no:
        parts.append("REF:" + normalize_key_text(record.reference_no))
    if record.balance_after is not None:
        parts.append("BAL:" + _money(record.balance_after))
    if occurrence:
        parts.append(f"#{occurrence}")
    return hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()


def fingerprint_batch(
    records: Iterable[TransactionRecord], granularity_minutes: int | None = None
) -> list[tuple[str, TransactionRecord]]:
    """Fingerprint a batch, numbering records that would otherwise collide.

    The first of several identical records keeps the plain fingerprint, so a
    single record's key never depends on the batch it arrived in.
    """
    occurrences: Counter[str] = Counter()
    keyed: list[tuple[str, TransactionRecord]] = []
    for record in records:
        base = build_fingerprint(record, granularity_minutes)
        occurrence = occurrences[base]
        occurrences[base] += 1
        if occurrence:
            keyed.append((build_fingerprint(record, granularity_minutes, occurrence), record))
        else:
            keyed.append((base, record))
    return keyed
