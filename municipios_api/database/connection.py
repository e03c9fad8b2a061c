"""
Database connection configuration using SQLAlchemy 2.0 async.

The record store defaults to an in-memory SQLite database. A single
connection is shared through `StaticPool`, otherwise every new connection
would open its own empty database.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from municipios_api.config.settings import get_settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def get_database_url() -> str:
    """Return the async database URL from settings."""
    return get_settings().database_url


def _is_in_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url)


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the async engine backing the record store.

    Args:
        database_url: SQLAlchemy async URL. Defaults to the configured one.
    """
    url = database_url or get_database_url()
    if _is_in_memory_sqlite(url):
        return create_async_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    return create_async_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using them
        echo=False,  # Set to True for SQL debugging
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for a short-lived database session.

    Commits on success, rolls back on error and always closes the session.

    Usage:
        async with session_scope(maker) as session:
            result = await session.execute(select(Model))
    """
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables known to `Base.metadata`."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
