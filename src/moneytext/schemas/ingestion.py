"""Result schemas for persistence and batch import."""

from pydantic import BaseModel, Field

from moneytext.schemas.enums import TransactionSource


class InsertResult(BaseModel):
    """Outcome of an insert-with-deduplication call."""

    inserted: int = Field(0, ge=0, description="Records whose fingerprint was new")
    skipped: int = Field(0, ge=0, description="Records already present in the store")


class IngestionResult(BaseModel):
    """Outcome of importing one batch (messages, emails or a statement file)."""

    source: TransactionSource
    received: int = Field(0, ge=0, description="Input items handed to the adapter")
    found: int = Field(0, ge=0, description="Items recognized as transactions")
    inserted: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    error_code: str | None = Field(
        None, description="Set when the whole input was unreadable (e.g. FILE_002)"
    )
