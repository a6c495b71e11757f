"""Transaction repository with fingerprint-based deduplication."""
import logging
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from moneytext.config import settings
from moneytext.dedup.fingerprint import fingerprint_batch
from moneytext.models.transaction import StoredTransaction
from moneytext.repositories.base import BaseRepository
from moneytext.schemas.enums import TransactionSource
from moneytext.schemas.ingestion import InsertResult
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)


class TransactionRepository(BaseRepository[StoredTransaction]):
    """SQL-backed transaction store.

    The unique constraint on ``fingerprint`` is the final arbiter: if a
    concurrent writer commits the same fingerprint first, the batch is
    retried row by row and the loser is counted as skipped.
    """

    def __init__(self, db: AsyncSession, granularity_minutes: int | None = None):
        super().__init__(db, StoredTransaction)
        self.granularity_minutes = (
            settings.dedup_granularity_minutes
            if granularity_minutes is None
            else granularity_minutes
        )

    async def existing_fingerprints(self, fingerprints: list[str]) -> set[str]:
        if not fingerprints:
            return set()
        result = await self.db.execute(
            select(StoredTransaction.fingerprint).where(
                StoredTransaction.fingerprint.in_(fingerprints)
            )
        )
        return set(result.scalars().all())

    async def exists(self, fingerprint: str) -> bool:
        return bool(await self.existing_fingerprints([fingerprint]))

    async def insert_with_deduplication(
        self, records: Iterable[TransactionRecord]
    ) -> InsertResult:
        """Insert records whose fingerprint is unseen; skip the rest.

        Identical records inside the batch are numbered by occurrence and
        each is inserted.
        """
        batch = dict(fingerprint_batch(records, self.granularity_minutes))

        seen = await self.existing_fingerprints(list(batch))
        fresh = {fp: rec for fp, rec in batch.items() if fp not in seen}
        skipped = len(seen)

        if not fresh:
            return InsertResult(inserted=0, skipped=skipped)

        self.db.add_all(StoredTransaction.from_record(rec, fp) for fp, rec in fresh.items())
        try:
            await self.db.commit()
            return InsertResult(inserted=len(fresh), skipped=skipped)
        except IntegrityError:
            await self.db.rollback()
            logger.info("Concurrent insert detected, retrying batch row by row")

        inserted = 0
        for fingerprint, record in fresh.items():
            try:
                async with self.db.begin_nested():
                    self.db.add(StoredTransaction.from_record(record, fingerprint))
                inserted += 1
            except IntegrityError:
                skipped += 1
        await self.db.commit()
        return InsertResult(inserted=inserted, skipped=skipped)

    async def count(self, source: TransactionSource | None = None) -> int:
        if source is None:
            return await super().count()
        result = await self.db.execute(
            select(func.count())
            .select_from(StoredTransaction)
            .where(StoredTransaction.source == source.value)
        )
        return int(result.scalar_one())

    async def list_recent(
        self, skip: int = 0, limit: int = 100, source: TransactionSource | None = None
    ) -> list[StoredTransaction]:
        """Get transactions newest first, optionally for one source."""
        query = select(StoredTransaction)
        if source is not None:
            query = query.where(StoredTransaction.source == source.value)
        result = await self.db.execute(
            query.order_by(StoredTransaction.timestamp.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())
