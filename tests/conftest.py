"""Pytest configuration and fixtures."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker

from txdedup.main import app
from txdedup.models.transaction import Base, Transaction
from txdedup.services.duplicates import CandidateTransaction

WALLET_ID = 7

# Mid-day so the UTC calendar day is unambiguous
IMPORT_DATE = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def unix(dt: datetime) -> int:
    return int(dt.timestamp())


def make_candidate(
    amount: int = 100000,
    date: datetime = IMPORT_DATE,
    description: str = "PAYMENT TO STARBUCKS #12345",
    reference_number: str = "",
    row_number: int = 1,
    wallet_id: int = WALLET_ID,
) -> CandidateTransaction:
    return CandidateTransaction(
        wallet_id=wallet_id,
        amount=amount,
        currency="VND",
        date=unix(date),
        description=description,
        reference_number=reference_number,
        row_number=row_number,
    )


def make_existing(
    amount: int = 100000,
    date: datetime = IMPORT_DATE,
    note: str | None = "PAYMENT TO STARBUCKS #12345",
    id: int = 1,
    wallet_id: int = WALLET_ID,
) -> Transaction:
    return Transaction(
        id=id,
        wallet_id=wallet_id,
        amount=amount,
        currency="VND",
        date=date,
        note=note,
    )


@pytest.fixture
def repository():
    """Create mock transaction repository with no stored transactions."""
    repo = AsyncMock()
    repo.find_by_wallet_and_date_range.return_value = []
    return repo


@pytest.fixture
async def client():
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def db_engine():
    """Create in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create database session for testing."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
async def async_db_engine():
    """Create async SQLite database for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def async_session(async_db_engine):
    """Create async database session for testing."""
    async_session_maker = async_sessionmaker(
        async_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session_maker() as session:
        yield session
