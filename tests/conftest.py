import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

from moneytext.db.session import get_db
from moneytext.main import app
from moneytext.schemas.internal import SmsMessage

# A single shared connection keeps the in-memory database alive across sessions.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

HDFC_SMS_BODY = (
    "Rs.500.00 debited from A/c XXXX1234 to AMAZON on 12-01-24. "
    "UPI Ref 123456789. Avl Bal Rs.4500.00"
)
# 2024-01-12 10:30 IST
HDFC_SMS_TIMESTAMP = 1705035600000

STATEMENT_CSV = (
    "Date,Narration,Chq./Ref.No.,Value Dt,Withdrawal Amt.,Deposit Amt.,Closing Balance\n"
    ",OPENING BALANCE,,,,,\"10,000.00\"\n"
    "12/01/24,UPI-SWIGGY-SWIGGY8@YBL-ICIC0000001-412345678901-PAYMENT,0000412345678901,"
    "12/01/24,250.00,,\"9,750.00\"\n"
    "15/01/24,NEFT-HDFC0001234-ACME CORP PVT LTD-SALARY JAN,NEFT123,15/01/24,,"
    "\"50,000.00\",\"59,750.00\"\n"
)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests run without touching the engine.
    """
    from moneytext.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def hdfc_sms() -> SmsMessage:
    return SmsMessage(sender="VM-HDFCBK", body=HDFC_SMS_BODY, timestamp=HDFC_SMS_TIMESTAMP)


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
