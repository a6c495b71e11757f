"""API version 1 routes."""

from fastapi import APIRouter

from moneytext.api.v1 import imports, parse, transactions

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(parse.router)
router.include_router(imports.router)
router.include_router(transactions.router)
