"""Transaction store protocol and the in-memory implementation."""

import asyncio
from typing import Iterable, Protocol

from moneytext.config import settings
from moneytext.dedup.fingerprint import fingerprint_batch
from moneytext.schemas.ingestion import InsertResult
from moneytext.schemas.transaction import TransactionRecord


class TransactionStore(Protocol):
    """Persistence collaborator for parsed records.

    ``insert_with_deduplication`` inserts records whose fingerprint is unseen
    and skips the rest. Identical records inside one batch are distinct
    occurrences, not repeats.
    """

    async def insert_with_deduplication(
        self, records: Iterable[TransactionRecord]
    ) -> InsertResult: ...


class InMemoryTransactionStore:
    """Dict-backed store, keyed by fingerprint, in insertion order.

    The dedup commit is serialized with an ``asyncio.Lock`` so concurrent
    batches can never both insert the same fingerprint.

    Example:
        >>> store = InMemoryTransactionStore()
        >>> await store.insert_with_deduplication(records)
        InsertResult(inserted=3, skipped=0)
    """

    def __init__(self, granularity_minutes: int | None = None):
        self.granularity_minutes = (
            settings.dedup_granularity_minutes
            if granularity_minutes is None
            else granularity_minutes
        )
        self._records: dict[str, TransactionRecord] = {}
        self._lock = asyncio.Lock()

    async def insert_with_deduplication(
        self, records: Iterable[TransactionRecord]
    ) -> InsertResult:
        inserted = skipped = 0
        async with self._lock:
            for fingerprint, record in fingerprint_batch(records, self.granularity_minutes):
                if fingerprint in self._records:
                    skipped += 1
                    continue
                self._records[fingerprint] = record
                inserted += 1
        return InsertResult(inserted=inserted, skipped=skipped)

    async def delete(self, fingerprint: str) -> bool:
        async with self._lock:
            return self._records.pop(fingerprint, None) is not None

    def all(self) -> list[TransactionRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
