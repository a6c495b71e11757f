"""Parser factory for routing inputs to the right source adapter.

This module wires the per-source adapters together:
1. SMS messages go to SmsParser
2. Emails go to EmailParser
3. Statement files are decoded by StatementFileExtractor, then parsed by
   StatementParser as rows (CSV) or text (PDF)
"""

import logging

from moneytext.parsers.base import TransactionParser
from moneytext.parsers.email import EmailParser
from moneytext.parsers.extractor import StatementContent, StatementFileExtractor
from moneytext.parsers.sms import SmsParser
from moneytext.parsers.statement import StatementParser
from moneytext.schemas.enums import TransactionSource
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)


class ParserFactory:
    """Factory holding one adapter per transaction source.

    Adapters can be replaced per source (e.g. a bank-specific statement
    parser) with ``register_parser``.

    Example:
        >>> factory = ParserFactory()
        >>> records = factory.get_parser(TransactionSource.SMS).parse_many(messages)
        >>> records = factory.parse_statement_file(pdf_bytes, content_type="application/pdf")
    """

    def __init__(self, extractor: StatementFileExtractor | None = None):
        """Initialize the parser factory.

        Args:
            extractor: Statement file extractor (default: new StatementFileExtractor)
        """
        self.extractor = extractor or StatementFileExtractor()
        self._parsers: dict[TransactionSource, TransactionParser] = {
            TransactionSource.SMS: SmsParser(),
            TransactionSource.EMAIL: EmailParser(),
            TransactionSource.STATEMENT: StatementParser(),
        }

    def register_parser(self, source: TransactionSource, parser: TransactionParser):
        """Replace the adapter used for ``source``.

        Raises:
            ValueError: If parser is not a TransactionParser for that source
        """
        if not isinstance(parser, TransactionParser):
            raise ValueError(f"Parser must inherit from TransactionParser, got {parser!r}")
        if parser.source != source:
            raise ValueError(f"Parser handles {parser.source.value}, not {source.value}")
        self._parsers[source] = parser

    def get_parser(self, source: TransactionSource) -> TransactionParser:
        return self._parsers[source]

    def parse_statement_file(
        self,
        data: bytes,
        content_type: str | None = None,
        filename: str | None = None,
        password: str | None = None,
    ) -> list[TransactionRecord]:
        """Decode and parse a statement file.

        Raises:
            StatementFileError: If the file cannot be read at all
        """
        content = self.extractor.extract(
            data, content_type=content_type, filename=filename, password=password
        )
        return self.parse_statement_content(content)

    def parse_statement_content(self, content: StatementContent) -> list[TransactionRecord]:
        """Parse already-decoded statement rows or text."""
        parser = self.get_parser(TransactionSource.STATEMENT)
        if content.is_tabular:
            records = parser.parse_rows(content.rows)
        else:
            records = parser.parse_text(content.text)
        logger.info(
            "Parsed statement file",
            extra={"source": TransactionSource.STATEMENT.value, "found": len(records)},
        )
        return records


# Singleton factory instance for global use
_factory_instance: ParserFactory | None = None


def get_parser_factory() -> ParserFactory:
    """Get or create the global ParserFactory instance."""
    global _factory_instance
    if _factory_instance is None:
        _factory_instance = ParserFactory()
    return _factory_instance


def parse(source: TransactionSource, payload) -> TransactionRecord | None:
    """Parse a single input with the global factory's adapter for ``source``.

    Args:
        source: Which adapter to use
        payload: SmsMessage, EmailMessage or ParsedStatementRow

    Returns:
        TransactionRecord, or None if the input is not a usable transaction
    """
    return get_parser_factory().get_parser(source).parse_safely(payload)
