"""
Fixtures shared by unit and integration tests.

Database tests run against a private in-memory SQLite database per test.
Point TEST_DATABASE_URL at another async URL (for instance a throwaway
PostgreSQL database) to run the same tests there:

    TEST_DATABASE_URL="postgresql+asyncpg://planner:pw@localhost/planner_test" pytest
"""

import os

# Settings are read lazily, but the secret has to be there before the first read
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from menu_planner.backend.models import Base, User
from menu_planner.backend.storage.local import LocalStore

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _engine_for(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        # every session must see the same in-memory database
        return create_async_engine(url, poolclass=StaticPool, connect_args={"check_same_thread": False})
    return create_async_engine(url)


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine with the users, dishes, menus and daily_menus tables created, dropped afterwards."""
    engine = _engine_for(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """One session for the whole test, rolled back at the end."""
    factory = async_sessionmaker(db_engine, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def user(db_session: AsyncSession) -> User:
    """Verified account cook@example.com with password secret123."""
    from menu_planner.backend.core.security import hash_password

    cook = User(email="cook@example.com", hashed_password=hash_password("secret123"), is_verified=True)
    db_session.add(cook)
    await db_session.flush()
    await db_session.refresh(cook)
    return cook


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "local")
