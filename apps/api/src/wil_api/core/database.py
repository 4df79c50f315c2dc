"""
Database Configuration

Async SQLAlchemy engine, session factory and the unit-of-work helper used by
every state-changing service operation.

Lifecycle:
- init_db() is called from the FastAPI lifespan at startup
- get_db() yields one session per request and always releases it
- close_db() disposes the engine at shutdown
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from wil_api.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def get_database_url() -> str:
    """Return the configured database URL with an async driver."""
    db_url = settings.database_url
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return db_url


engine = create_async_engine(
    get_database_url(),
    echo=settings.db_echo,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db() -> None:
    """Verify the database is reachable. Call this on application startup."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def close_db() -> None:
    """Dispose of the connection pool. Call this on application shutdown."""
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    The session is closed (and its connection returned to the pool) on every
    exit path, including unhandled errors in the endpoint.
    """
    async with async_session_maker() as session:
        yield session


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of work as a single transaction.

    Commits when the block exits normally. Any exception, including task
    cancellation, rolls back every write made in the block and is re-raised.

    Usage:
        async with transaction(db):
            await repository.create_account(db, ...)
            await repository.delete_code(db, ...)
    """
    try:
        yield db
        await db.commit()
    except BaseException:
        await db.rollback()
        raise


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency for work that opens its own sessions, such as the sweep."""
    return async_session_maker
