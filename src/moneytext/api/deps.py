"""FastAPI dependency injection for the database and services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from moneytext.db.session import get_db
from moneytext.repositories.transaction import TransactionRepository
from moneytext.services.ingestion import IngestionService


async def get_transaction_repository(
    db: AsyncSession = Depends(get_db),
) -> TransactionRepository:
    """
    Get transaction repository instance.

    Args:
        db: Database session

    Returns:
        TransactionRepository instance
    """
    return TransactionRepository(db)


async def get_ingestion_service(
    repo: TransactionRepository = Depends(get_transaction_repository),
) -> IngestionService:
    """
    Get ingestion service instance backed by the SQL store.

    Args:
        repo: Transaction repository

    Returns:
        IngestionService instance
    """
    return IngestionService(repo)
