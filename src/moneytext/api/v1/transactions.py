"""Stored transaction endpoints: list and delete."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from moneytext.api.deps import get_transaction_repository
from moneytext.core.exceptions import ExtractionError
from moneytext.models.transaction import StoredTransaction
from moneytext.repositories.transaction import TransactionRepository
from moneytext.schemas.api import TransactionListResponse, TransactionResponse
from moneytext.schemas.enums import TransactionSource

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _to_response(row: StoredTransaction) -> TransactionResponse:
    record = row.to_record()
    return TransactionResponse(
        id=row.id,
        created_at=row.created_at,
        **record.model_dump(exclude={"summary"}),
    )


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
    source: TransactionSource | None = None,
    repo: TransactionRepository = Depends(get_transaction_repository),
) -> TransactionListResponse:
    """List stored transactions, newest first."""
    rows = await repo.list_recent(skip=skip, limit=limit, source=source)
    return TransactionListResponse(
        transactions=[_to_response(row) for row in rows],
        total=await repo.count(source),
    )


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: UUID,
    repo: TransactionRepository = Depends(get_transaction_repository),
) -> Response:
    """Delete a stored transaction (corrections are delete + re-import)."""
    deleted = await repo.delete(transaction_id)
    if not deleted:
        raise ExtractionError(
            "API_003", {"id": str(transaction_id)}, http_status=status.HTTP_404_NOT_FOUND
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
