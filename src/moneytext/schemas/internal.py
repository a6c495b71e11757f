"""Internal data schemas for raw inputs and intermediate parse results.

Inputs arrive from acquisition collaborators (device message store, mail
provider, file upload); the intermediate statement row is what the statement
adapter extracts before categorization turns it into a ``TransactionRecord``.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from moneytext.schemas.enums import TransactionDirection


class SmsMessage(BaseModel):
    """A device text message as handed over by the message-store reader."""

    sender: str = Field(..., description="Sender address or short code (e.g. VM-HDFCBK)")
    body: str = Field(..., description="Message body")
    timestamp: int = Field(..., ge=0, description="Received time, epoch milliseconds")


class EmailMessage(BaseModel):
    """An email as returned by the mail-provider collaborator.

    ``payload`` follows the Gmail API message payload shape
    (``mimeType``, ``body.data`` as base64url, nested ``parts``). A collaborator
    that already decoded the body can pass ``body`` instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field("", alias="id")
    subject: str = ""
    sender: str = Field("", alias="from", description="Raw From header")
    snippet: str = ""
    body: str | None = None
    payload: dict[str, Any] | None = None
    date: int | None = Field(None, ge=0, description="Internal date, epoch milliseconds")
    date_header: str | None = Field(None, description="RFC 2822 Date header")


class ParsedStatementRow(BaseModel):
    """A single row or line extracted from a bank statement.

    Contains the raw description; merchant, category and payment method are
    resolved later by the shared extractors.
    """

    transaction_date: date = Field(..., description="Transaction date")
    description: str = Field(..., description="Narration / particulars text")
    amount: Decimal = Field(..., description="Amount in rupees (positive)")
    direction: TransactionDirection = Field(default=TransactionDirection.DEBIT)
    balance: Decimal | None = Field(None, description="Running balance, if printed")

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        """Ensure description is not empty."""
        if not v or not v.strip():
            raise ValueError("Description cannot be empty")
        return " ".join(v.split())
