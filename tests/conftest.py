"""
Pytest configuration and shared fixtures.

This module provides common test fixtures for database sessions,
settings, services and the HTTP test client.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import crosspay.models  # noqa: E402,F401
from crosspay.core.config import Settings, get_settings  # noqa: E402
from crosspay.core.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from crosspay.main import app  # noqa: E402
from crosspay.services.payment_link_service import PaymentLinkService  # noqa: E402
from crosspay.services.transaction_service import TransactionService  # noqa: E402

# Test database URL (in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

CREATOR = "0x" + "A" * 39 + "1"
RECIPIENT = "0x" + "B" * 39 + "2"
STRANGER = "0x" + "C" * 39 + "3"

BASE_SEPOLIA = 84532
AVALANCHE_FUJI = 43113


@pytest.fixture(scope="function")
async def async_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a fixed frontend URL."""
    return Settings(
        frontend_url="https://crosspay.test",
        database_url="sqlite:///:memory:",
    )


@pytest.fixture
def payment_link_service(db_session, test_settings) -> PaymentLinkService:
    return PaymentLinkService(db_session, test_settings)


@pytest.fixture
def transaction_service(db_session, test_settings) -> TransactionService:
    return TransactionService(db_session, test_settings)


@pytest.fixture(scope="function")
async def client(db_session, test_settings) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP test client bound to the test database."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_payment_link_data():
    """Payment link request in wire format."""
    return {
        "creatorAddress": CREATOR,
        "recipientAddress": RECIPIENT,
        "amount": "1000000000000000000",
        "solverFee": "10000000000000000",
        "sourceChainId": BASE_SEPOLIA,
        "destinationChainId": AVALANCHE_FUJI,
        "expiresInHours": 24,
    }
