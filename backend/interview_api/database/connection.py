"""
Async database engine and session factory.
Uses SQLAlchemy 2.0 with asyncpg. Created once in the app lifespan and
kept on ``app.state``; nothing here is built at import time.
"""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from interview_api.config import Settings
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async engine with connection pool settings."""
    db_url = settings.database_url
    logger.info(f"Connecting to database: {db_url.split('@')[1] if '@' in db_url else 'unknown'}")
    return create_async_engine(
        db_url,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=False,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a read-only session; rolled back and closed on exit."""
    async with factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


async def close_engine(engine: AsyncEngine) -> None:
    """Dispose of the connection pool."""
    await engine.dispose()
    logger.info("Database pool disposed")
