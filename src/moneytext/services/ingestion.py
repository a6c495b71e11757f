"""Ingestion service.

Orchestrates one import batch end to end:
1. Route the inputs to the matching source adapter
2. Collect the records the adapter recognizes
3. Hand them to the store's insert-with-deduplication call
4. Report received / found / inserted / skipped counts
"""

import logging
from typing import Sequence

from moneytext.core.exceptions import StatementFileError
from moneytext.dedup.store import TransactionStore
from moneytext.parsers.factory import ParserFactory, get_parser_factory
from moneytext.schemas.enums import TransactionSource
from moneytext.schemas.ingestion import IngestionResult
from moneytext.schemas.internal import EmailMessage, SmsMessage
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)


class IngestionService:
    """Imports messages, emails and statements into a transaction store.

    Re-importing the same inputs is idempotent: the store skips every
    record whose fingerprint it has already seen.
    """

    def __init__(self, store: TransactionStore, parser_factory: ParserFactory | None = None):
        """Initialize the service.

        Args:
            store: Persistence collaborator (SQL repository or in-memory store)
            parser_factory: Adapter registry (default: global factory)
        """
        self.store = store
        self.parser_factory = parser_factory or get_parser_factory()

    async def _persist(
        self, source: TransactionSource, received: int, records: list[TransactionRecord]
    ) -> IngestionResult:
        outcome = await self.store.insert_with_deduplication(records)
        result = IngestionResult(
            source=source,
            received=received,
            found=len(records),
            inserted=outcome.inserted,
            skipped=outcome.skipped,
        )
        logger.info(
            "Ingested %s batch",
            source.value,
            extra={
                "source": source.value,
                "found": result.found,
                "inserted": result.inserted,
                "skipped": result.skipped,
            },
        )
        return result

    async def ingest_sms(self, messages: Sequence[SmsMessage]) -> IngestionResult:
        parser = self.parser_factory.get_parser(TransactionSource.SMS)
        return await self._persist(TransactionSource.SMS, len(messages), parser.parse_many(messages))

    async def ingest_emails(self, emails: Sequence[EmailMessage]) -> IngestionResult:
        """Import a bounded batch of emails (extra items beyond the cap are ignored)."""
        parser = self.parser_factory.get_parser(TransactionSource.EMAIL)
        return await self._persist(TransactionSource.EMAIL, len(emails), parser.parse_many(emails))

    async def ingest_statement_rows(self, rows: Sequence[Sequence[str]]) -> IngestionResult:
        """Import a table of cells whose header row names the columns."""
        parser = self.parser_factory.get_parser(TransactionSource.STATEMENT)
        records = parser.parse_rows(rows)
        return await self._persist(TransactionSource.STATEMENT, max(len(rows) - 1, 0), records)

    async def ingest_statement_text(self, text: str) -> IngestionResult:
        parser = self.parser_factory.get_parser(TransactionSource.STATEMENT)
        received = sum(1 for line in text.splitlines() if line.strip())
        return await self._persist(TransactionSource.STATEMENT, received, parser.parse_text(text))

    async def ingest_statement_file(
        self,
        data: bytes,
        content_type: str | None = None,
        filename: str | None = None,
        password: str | None = None,
    ) -> IngestionResult:
        """Import a PDF/CSV/text statement file.

        An unreadable file yields an empty result carrying the error code
        instead of raising.
        """
        try:
            content = self.parser_factory.extractor.extract(
                data, content_type=content_type, filename=filename, password=password
            )
        except StatementFileError as e:
            logger.warning(
                "Statement file unreadable: %s",
                e.error_code,
                extra={"error_code": e.error_code, "source": TransactionSource.STATEMENT.value},
            )
            return IngestionResult(source=TransactionSource.STATEMENT, error_code=e.error_code)
        records = self.parser_factory.parse_statement_content(content)
        return await self._persist(TransactionSource.STATEMENT, content.entry_count, records)
