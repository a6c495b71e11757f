"""Shared extraction pipeline for every source adapter.

Each adapter decides *whether* an input is a transaction and which text to
read; turning that text into a ``TransactionRecord`` is identical for all
sources and lives here, so SMS, email and statement results stay consistent.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable

from pydantic import ValidationError

from moneytext.categorization import categorize
from moneytext.core.exceptions import AmountParseError, ExtractionError
from moneytext.extraction import (
    classify_direction,
    detect_payment_method,
    extract_amount,
    extract_balance,
    extract_merchant,
    extract_reference,
    within_bounds,
)
from moneytext.schemas.enums import TransactionDirection, TransactionSource
from moneytext.schemas.transaction import TransactionRecord

logger = logging.getLogger(__name__)


class TransactionParser:
    """Base class for source adapters.

    Subclasses set ``source`` and implement ``parse()`` for one input item.
    ``parse_many()`` applies it to a batch, dropping items that are not
    transactions or fail extraction; a bad item never aborts the batch.
    """

    source: TransactionSource

    def parse(self, item: Any) -> TransactionRecord | None:
        raise NotImplementedError

    def parse_many(self, items: Iterable[Any]) -> list[TransactionRecord]:
        """Parse a batch, preserving input order."""
        records: list[TransactionRecord] = []
        for item in items:
            record = self.parse_safely(item)
            if record is not None:
                records.append(record)
        return records

    def parse_safely(self, item: Any) -> TransactionRecord | None:
        """Run ``parse()`` and turn per-item failures into a logged skip."""
        try:
            return self.parse(item)
        except ExtractionError as e:
            logger.warning(
                "Skipping %s item: %s",
                self.source.value,
                e.error_code,
                extra={"error_code": e.error_code, "source": self.source.value},
            )
        except ValidationError as e:
            logger.warning(
                "Skipping %s item: record validation failed (%d errors)",
                self.source.value,
                e.error_count(),
                extra={"error_code": "EXTRACT_004", "source": self.source.value},
            )
        return None

    def build_record(
        self,
        text: str,
        timestamp: int,
        *,
        amount: Decimal | None = None,
        direction: TransactionDirection | None = None,
        sender: str | None = None,
        balance: Decimal | None = None,
    ) -> TransactionRecord | None:
        """Run the shared extractors over ``text`` and assemble a record.

        Args:
            text: Text the fields are read from; stored as ``raw_text``.
            timestamp: Epoch milliseconds.
            amount: Pre-parsed amount (statement columns); otherwise extracted.
            direction: Known direction; otherwise classified from keywords.
            sender: Display-name fallback for the merchant.
            balance: Pre-parsed running balance; otherwise extracted.

        Returns:
            TransactionRecord, or None if no amount is present.

        Raises:
            AmountParseError: If the amount is outside the plausibility bounds.
        """
        if amount is None:
            amount = extract_amount(text)
            if amount is None:
                return None
        if not within_bounds(amount):
            raise AmountParseError({"amount": str(amount)})

        merchant = extract_merchant(text, sender=sender)
        category, investment_type = categorize(text, merchant)

        return TransactionRecord(
            raw_text=text,
            source=self.source,
            timestamp=timestamp,
            amount=amount,
            direction=direction or classify_direction(text),
            category=category,
            investment_type=investment_type,
            merchant=merchant,
            payment_method=detect_payment_method(text),
            reference_no=extract_reference(text),
            balance_after=balance if balance is not None else extract_balance(text),
        )
