"""Stateless parse and classify endpoints (nothing is stored)."""

from fastapi import APIRouter

from moneytext.categorization import classify
from moneytext.parsers.factory import parse
from moneytext.schemas.api import ClassifyRequest, ParseResponse
from moneytext.schemas.classification import ClassificationResult
from moneytext.schemas.enums import TransactionSource
from moneytext.schemas.internal import EmailMessage, SmsMessage

router = APIRouter(tags=["parse"])


@router.post("/parse/sms", response_model=ParseResponse)
async def parse_sms(message: SmsMessage) -> ParseResponse:
    """Parse one text message; ``transaction`` is null if it isn't one."""
    record = parse(TransactionSource.SMS, message)
    return ParseResponse(is_transaction=record is not None, transaction=record)


@router.post("/parse/email", response_model=ParseResponse)
async def parse_email(message: EmailMessage) -> ParseResponse:
    record = parse(TransactionSource.EMAIL, message)
    return ParseResponse(is_transaction=record is not None, transaction=record)


@router.post("/classify", response_model=ClassificationResult)
async def classify_text(request: ClassifyRequest) -> ClassificationResult:
    """Explain the investment classification of a text, with reasons."""
    return classify(request.text)
