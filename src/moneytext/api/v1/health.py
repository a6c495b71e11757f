import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from moneytext.api.deps import get_transaction_repository
from moneytext.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness check; never touches the store."""
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(repo: TransactionRepository = Depends(get_transaction_repository)):
    """Readiness: the transactions table answers a count query."""
    try:
        stored = await repo.count()
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed", extra={"error_type": type(e).__name__})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "disconnected"},
        )
    return {"status": "ready", "database": "connected", "transactions": stored}
