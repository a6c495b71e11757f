"""Canonical transaction record emitted by every source adapter."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from moneytext.config import settings
from moneytext.schemas.enums import (
    InvestmentType,
    PaymentMethod,
    TransactionCategory,
    TransactionDirection,
    TransactionSource,
)
from moneytext.summary import generate_summary


class TransactionRecord(BaseModel):
    """A single structured transaction, created once and never mutated.

    Corrections are modeled by the persistence layer as delete + reinsert.
    The summary is computed from the other fields on access; any ``summary``
    key passed in is ignored.
    """

    model_config = ConfigDict(frozen=True)

    raw_text: str = Field(..., description="Original message/row text (truncated)")
    source: TransactionSource = Field(..., description="Provenance of the record")
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")
    amount: Decimal = Field(..., gt=0, description="Positive amount in rupees")
    direction: TransactionDirection = Field(default=TransactionDirection.DEBIT)
    category: TransactionCategory = Field(default=TransactionCategory.OTHER)
    investment_type: InvestmentType | None = Field(
        None, description="Only set when category is INVESTMENT"
    )
    merchant: str | None = Field(None, description="Counterparty name")
    payment_method: PaymentMethod | None = None
    reference_no: str | None = None
    balance_after: Decimal | None = None

    @field_validator("raw_text")
    @classmethod
    def truncate_raw_text(cls, v: str) -> str:
        return v[: settings.raw_text_max_length]

    @field_validator("merchant")
    @classmethod
    def bound_merchant(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v[: settings.merchant_max_length].strip()
        return v or None

    @field_validator("reference_no")
    @classmethod
    def bound_reference(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()[: settings.reference_max_length]
        return v or None

    @model_validator(mode="after")
    def investment_type_requires_investment(self) -> "TransactionRecord":
        if self.investment_type is not None and self.category != TransactionCategory.INVESTMENT:
            raise ValueError("investment_type is only allowed for INVESTMENT transactions")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def summary(self) -> str:
        return generate_summary(
            self.amount,
            self.direction,
            self.category,
            merchant=self.merchant,
            investment_type=self.investment_type,
        )
