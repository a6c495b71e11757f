"""Stored transaction: a persisted TransactionRecord plus its fingerprint."""
from decimal import Decimal

from sqlalchemy import BigInteger, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from moneytext.models.base import BaseModel
from moneytext.schemas.enums import (
    InvestmentType,
    PaymentMethod,
    TransactionCategory,
    TransactionDirection,
    TransactionSource,
)
from moneytext.schemas.transaction import TransactionRecord

_PAISE = Decimal(100)


def to_paise(amount: Decimal | None) -> int | None:
    if amount is None:
        return None
    return int((amount * _PAISE).to_integral_value())


def from_paise(value: int | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(value) / _PAISE


class StoredTransaction(BaseModel):
    """Transaction row. Amounts are stored as integer paise."""

    __tablename__ = "transactions"

    fingerprint: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    source: Mapped[str] = mapped_column(String(16), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    direction: Mapped[str] = mapped_column(String(8), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    investment_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    merchant: Mapped[str | None] = mapped_column(String(30), nullable=True)
    payment_method: Mapped[str | None] = mapped_column(String(16), nullable=True)
    reference_no: Mapped[str | None] = mapped_column(String(20), nullable=True)
    balance_after: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    raw_text: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (Index("ix_transactions_source_timestamp", "source", "timestamp"),)

    @classmethod
    def from_record(cls, record: TransactionRecord, fingerprint: str) -> "StoredTransaction":
        return cls(
            fingerprint=fingerprint,
            source=record.source.value,
            timestamp=record.timestamp,
            amount=to_paise(record.amount),
            direction=record.direction.value,
            category=record.category.value,
            investment_type=record.investment_type.value if record.investment_type else None,
            merchant=record.merchant,
            payment_method=record.payment_method.value if record.payment_method else None,
            reference_no=record.reference_no,
            balance_after=to_paise(record.balance_after),
            raw_text=record.raw_text,
            summary=record.summary[:255],
        )

    def to_record(self) -> TransactionRecord:
        return TransactionRecord(
            raw_text=self.raw_text,
            source=TransactionSource(self.source),
            timestamp=self.timestamp,
            amount=from_paise(self.amount),
            direction=TransactionDirection(self.direction),
            category=TransactionCategory(self.category),
            investment_type=InvestmentType(self.investment_type) if self.investment_type else None,
            merchant=self.merchant,
            payment_method=PaymentMethod(self.payment_method) if self.payment_method else None,
            reference_no=self.reference_no,
            balance_after=from_paise(self.balance_after),
        )

    def __repr__(self) -> str:
        return f"<StoredTransaction(id={self.id}, merchant={self.merchant}, amount={self.amount})>"
