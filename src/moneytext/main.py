import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from moneytext.api.middleware.error_handler import (
    handle_extraction_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from moneytext.api.middleware.logging import RequestLoggingMiddleware
from moneytext.api.v1 import router as v1_router
from moneytext.api.v1.health import router as health_router
from moneytext.config import settings
from moneytext.core.exceptions import ExtractionError
from moneytext.core.logging import configure_logging
from moneytext.db.session import async_engine, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_db()
    logger.info("MoneyText API started", extra={"env": settings.app_env})
    yield
    await async_engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="MoneyText API",
        description="Structured transactions from bank SMS, email and statements",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(ExtractionError, handle_extraction_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
