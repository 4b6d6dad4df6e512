"""
Database connection management and session handling.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine,
)

from .config import get_settings
from .models.base import Base
from .cache import init_cache, close_cache

logger = logging.getLogger(__name__)

# Global engine and session factory
engine: AsyncEngine | None = None
async_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_database_engine() -> AsyncEngine:
    """Create and configure the database engine with connection pooling."""
    settings = get_settings()

    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=3600,   # Recycle connections every hour
        echo=settings.debug,
        connect_args={
            "server_settings": {
                "application_name": "fleet_inventory_platform",
            }
        }
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory for database sessions."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=True,
        autocommit=False,
    )


async def init_database() -> None:
    """Initialize database connection and create tables."""
    global engine, async_session_factory

    logger.info("Initializing database connection...")

    engine = create_database_engine()
    async_session_factory = create_session_factory(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Redis is only needed for layout locks
    if get_settings().enable_layout_locks:
        await init_cache()

    logger.info("Database initialized successfully")


async def close_database() -> None:
    """Close database connections."""
    global engine

    if engine:
        logger.info("Closing database connections...")
        await engine.dispose()
        logger.info("Database connections closed")

    await close_cache()


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session with automatic cleanup.

    Usage:
        async with get_db_session() as session:
            result = await session.execute(query)
    """
    if async_session_factory is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# FastAPI dependency function
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for getting database sessions.

    Usage in FastAPI endpoints:
        @app.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_db_session() as session:
        yield session
