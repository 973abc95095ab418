"""
Database Engine and Sessions.

The async engine is built on first use from database.yaml, so importing
this module never needs the database or the secrets. Each request gets
one session that commits when the endpoint returns and rolls back when
it raises.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from menu_planner.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(db_config: Any) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": db_config.echo}
    # sqlite uses a single-connection pool; pool sizing only applies to servers
    if not db_config.driver.startswith("sqlite"):
        options.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
            pool_pre_ping=True,
        )
    return options


def _create_engine() -> AsyncEngine:
    from menu_planner.backend.core.config import get_app_config, get_database_url, is_sqlite, sqlite_path

    db_config = get_app_config().database
    if is_sqlite(db_config.driver):
        sqlite_path(db_config.name).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(get_database_url(), **_engine_options(db_config))
    logger.debug(
        "Database engine created",
        extra={"driver": db_config.driver, "host": db_config.host, "name": db_config.name},
    )
    return engine


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _async_session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding the request's session.

    Usage:
        @router.get("/dishes")
        async def list_dishes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create the users, dishes, menus and daily_menus tables if they are missing.

    Existing tables are left untouched; there are no migrations.
    """
    from menu_planner.backend.models import Base

    target = engine or get_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def dispose_engine() -> None:
    """Close pooled connections and drop the cached engine and session factory."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None
