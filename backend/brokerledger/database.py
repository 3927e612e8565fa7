# backend/brokerledger/database.py
"""
Async database engine and session management.

This module configures SQLAlchemy's asyncio extension with:
- Connection pooling for PostgreSQL (asyncpg)
- A single shared connection for in-memory SQLite (aiosqlite, tests only)
- Health check capabilities

Importing this module never opens a connection. Callers own the engine:
entry points build one from settings, tests build one per test.
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from .config import settings
from .models import Base

logger = logging.getLogger(__name__)


def create_engine_from_url(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Create an async engine with configuration appropriate to the backend.

    Process entry points call this without arguments to get an engine for
    settings.database_url, echoing SQL when settings.debug is set.

    - SQLite: StaticPool so an in-memory database survives across sessions
    - PostgreSQL: pooled connections sized from settings
    """
    database_url = database_url or settings.database_url
    echo = settings.debug if echo is None else echo

    if database_url.lower().startswith("sqlite"):
        logger.info("Configuring SQLite database (test mode)")
        return create_async_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    logger.info(
        f"Configuring PostgreSQL database pool: "
        f"size={settings.db_pool_size}, "
        f"max_overflow={settings.db_pool_max_overflow}, "
        f"recycle={settings.db_pool_recycle}s, "
        f"pre_ping={settings.db_pool_pre_ping}"
    )
    return create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_timeout=30,
        echo=echo,
    )


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_database_health(engine: AsyncEngine) -> dict:
    """
    Check database connectivity.

    Returns:
        dict: Health status with backend name, or the error message
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "database": "sqlite" if engine.dialect.name == "sqlite" else "postgresql",
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
        }
