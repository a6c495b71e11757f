"""Request/response schemas for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from moneytext.schemas.transaction import TransactionRecord


class ClassifyRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=10000, description="Text to classify")


class ParseResponse(BaseModel):
    """Result of parsing a single input without storing it."""

    is_transaction: bool
    transaction: TransactionRecord | None = None


class TransactionResponse(TransactionRecord):
    """Stored transaction as returned by the API."""

    id: UUID
    created_at: datetime


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    total: int = Field(..., ge=0)
