# backend/app/db/session.py
"""
Async database access for SQLAlchemy.

One Database instance is created by the app factory and injected into
every store, so a request never opens a second, ad-hoc connection.

Production considerations:
- Uses asyncpg for PostgreSQL
- Uses aiosqlite for SQLite (local development fallback)
- Pool settings differ for SQLite (no pooling) vs PostgreSQL
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool

from backend.app.core.config import Settings
from backend.app.db.base import Base

logger = logging.getLogger(__name__)


def _create_async_engine(settings: Settings) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    SQLite (local development):
    - NullPool, a new connection per checkout
    - check_same_thread=False for async compatibility

    PostgreSQL (production):
    - AsyncAdaptedQueuePool with pre-ping and periodic recycling
    """
    if settings.is_sqlite:
        return create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
    )


class Database:
    """Owns the engine and the session factory for the whole application."""

    def __init__(self, settings: Settings):
        self.engine: AsyncEngine = _create_async_engine(settings)

        # expire_on_commit=False: rows stay readable after the session closes
        # autoflush=False: explicit control over DB writes
        self.sessionmaker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session for a single store operation.

        Does NOT auto-commit. Writers call ``await session.commit()``;
        anything left uncommitted is rolled back on close.
        """
        async with self.sessionmaker() as session:
            yield session

    async def create_all(self) -> None:
        """Create every table registered on Base.metadata."""
        from backend.app import models  # noqa: F401  (registers the tables)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def drop_all(self) -> None:
        from backend.app import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
