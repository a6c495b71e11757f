"""Data schemas shared across extraction, persistence and the API."""

from moneytext.schemas.classification import ClassificationResult
from moneytext.schemas.enums import (
    ConfidenceLevel,
    InvestmentType,
    PaymentMethod,
    TransactionCategory,
    TransactionDirection,
    TransactionSource,
)
from moneytext.schemas.ingestion import IngestionResult, InsertResult
from moneytext.schemas.internal import EmailMessage, ParsedStatementRow, SmsMessage
from moneytext.schemas.transaction import TransactionRecord

__all__ = [
    "ClassificationResult",
    "ConfidenceLevel",
    "EmailMessage",
    "IngestionResult",
    "InsertResult",
    "InvestmentType",
    "ParsedStatementRow",
    "PaymentMethod",
    "SmsMessage",
    "TransactionCategory",
    "TransactionDirection",
    "TransactionRecord",
    "TransactionSource",
]
