"""
Database Connection Module
Owns the SQLAlchemy async engine and the session factory.

One ``Database`` is created at startup, kept on ``app.state`` and handed to
request handlers through the ``get_db`` dependency.
"""

import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


# Base class for all our models
class Base(DeclarativeBase):
    pass


class Database:
    """Async engine plus session factory for one relational store."""

    def __init__(self, url: str, echo: bool = False):
        if url.startswith("sqlite"):
            # A single shared connection so in-memory databases survive
            engine_kwargs = {
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        else:
            engine_kwargs = {
                "pool_size": 5,  # Connection pool size
                "max_overflow": 10,  # Extra connections when pool is full
                "pool_pre_ping": True,
            }

        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)

        # Session factory - creates new database sessions
        self.session_maker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False  # Objects remain accessible after commit
        )

    async def connect(self) -> None:
        """
        Verify connectivity and create missing tables.
        Called once at application startup; failures are fatal.
        """
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session and ensures cleanup.

    Anything not committed by the handler is rolled back on close.
    """
    database: Database = request.app.state.database
    async with database.session_maker() as session:
        try:
            yield session
        finally:
            await session.close()
