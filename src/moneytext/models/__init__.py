"""Database models."""

from moneytext.models.base import Base, BaseModel
from moneytext.models.transaction import StoredTransaction

__all__ = ["Base", "BaseModel", "StoredTransaction"]
