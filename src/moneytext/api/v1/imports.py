"""Import endpoints: parse a batch and store it with deduplication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status

from moneytext.api.deps import get_ingestion_service
from moneytext.config import settings
from moneytext.core.exceptions import ExtractionError
from moneytext.parsers.extractor import (
    CSV_CONTENT_TYPES,
    EXCEL_CONTENT_TYPES,
    PDF_CONTENT_TYPES,
    TEXT_CONTENT_TYPES,
)
from moneytext.schemas.ingestion import IngestionResult
from moneytext.schemas.internal import EmailMessage, SmsMessage
from moneytext.services.ingestion import IngestionService

router = APIRouter(prefix="/import", tags=["import"])

ALLOWED_STATEMENT_TYPES = (
    PDF_CONTENT_TYPES | CSV_CONTENT_TYPES | TEXT_CONTENT_TYPES | EXCEL_CONTENT_TYPES
)


@router.post("/sms", response_model=IngestionResult)
async def import_sms(
    messages: list[SmsMessage],
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """Import device text messages; non-transaction messages are ignored."""
    return await service.ingest_sms(messages)


@router.post("/emails", response_model=IngestionResult)
async def import_emails(
    emails: list[EmailMessage],
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """Import emails fetched by the mail collaborator (at most ``email_max_batch``)."""
    return await service.ingest_emails(emails)


@router.post(
    "/statement",
    response_model=IngestionResult,
    status_code=status.HTTP_200_OK,
    responses={
        413: {"description": "File too large"},
        415: {"description": "Unsupported content type"},
    },
)
async def import_statement(
    request: Request,
    password: Annotated[
        str | None,
        Header(alias="X-PDF-Password", description="Optional password for encrypted PDFs."),
    ] = None,
    filename: Annotated[
        str | None,
        Header(alias="X-Filename", description="Original file name, if known."),
    ] = None,
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """
    Import a bank statement sent as the raw request body (PDF, CSV, Excel or text).

    An unreadable file returns a result with zero records and an
    ``error_code`` (e.g. FILE_002 when a password is required).
    """
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_STATEMENT_TYPES:
        raise ExtractionError(
            "API_001", {"content_type": content_type}, http_status=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
        )

    # Read request body in-memory with a strict size cap (no disk spooling).
    max_bytes = settings.statement_max_size_mb * 1024 * 1024
    buf = bytearray()
    async for chunk in request.stream():
        if not chunk:
            continue
        if len(buf) + len(chunk) > max_bytes:
            raise ExtractionError(
                "API_002", http_status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
            )
        buf.extend(chunk)

    return await service.ingest_statement_file(
        bytes(buf), content_type=content_type, filename=filename, password=password
    )
