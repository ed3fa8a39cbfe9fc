"""
Test configuration and fixtures for the banking dashboard tests.
"""
import pytest
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from bankdash.core.database import Base, get_db, enable_sqlite_foreign_keys
from main import app


# ============================================================
# Database Fixtures
# ============================================================

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = enable_sqlite_foreign_keys(
        create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False
        )
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for each test"""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================
# Account Fixtures
# ============================================================

@pytest.fixture
async def sample_accounts(db_session):
    """The two demo accounts: "1" (CHECKING, 5000.00) and "2" (SAVINGS, 10000.00)"""
    from bankdash.modules.accounts.services import seed_sample_accounts
    from bankdash.modules.accounts.models import Account

    await seed_sample_accounts(db_session)

    return {
        "1": await db_session.get(Account, "1"),
        "2": await db_session.get(Account, "2"),
    }


@pytest.fixture
async def test_account(sample_accounts):
    """Checking account "1" with a 5000.00 balance"""
    return sample_accounts["1"]
