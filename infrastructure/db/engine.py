"""Database engine and session management utilities.

The collector writes to PostgreSQL through asyncpg; SQLite (aiosqlite) is
accepted for local runs and tests.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.database.defaults import (
    COMMAND_TIMEOUT as DB_COMMAND_TIMEOUT,
    ECHO as DB_ECHO,
    MAX_OVERFLOW as DB_MAX_OVERFLOW,
    POOL_RECYCLE as DB_POOL_RECYCLE,
    POOL_SIZE as DB_POOL_SIZE,
)
from config.database.urls import TFTIPS_DATABASE_URL, TFTIPS_DATABASE_URL_ENV
from core.exceptions import ConfigurationError, DatabaseError
from core.utils.config_helpers import normalise_async_url

logger = logging.getLogger(__name__)

AsyncSessionFactory = async_sessionmaker[AsyncSession]


def create_engine(
    url: Optional[str] = None,
    *,
    echo: bool = DB_ECHO,
    pool_size: int = DB_POOL_SIZE,
    max_overflow: int = DB_MAX_OVERFLOW,
    pool_recycle: int = DB_POOL_RECYCLE,
) -> AsyncEngine:
    """Create an async SQLAlchemy engine for the winning comps database.

    Falls back to ``TFTIPS_DATABASE_URL`` when ``url`` is not given. The
    driver is detected from the URL prefix.
    """
    resolved = normalise_async_url(url) if url else TFTIPS_DATABASE_URL
    if not resolved:
        raise ConfigurationError(
            f"{TFTIPS_DATABASE_URL_ENV} is not set", key=TFTIPS_DATABASE_URL_ENV
        )

    if resolved.startswith("sqlite"):
        if ":memory:" in resolved:
            # every pooled connection would otherwise see its own empty database
            return create_async_engine(resolved, echo=echo, poolclass=StaticPool)
        return create_async_engine(resolved, echo=echo)

    return create_async_engine(
        resolved,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=pool_recycle,
        pool_pre_ping=True,
        connect_args={"command_timeout": DB_COMMAND_TIMEOUT},
    )


def get_session_factory(engine: AsyncEngine) -> AsyncSessionFactory:
    """Return an ``async_sessionmaker`` bound to ``engine``."""

    return async_sessionmaker(engine, expire_on_commit=False)


@asynccontextmanager
async def session_scope(factory: AsyncSessionFactory) -> AsyncIterator[AsyncSession]:
    """Provide a transactional scope around a series of operations."""

    session = factory()
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise DatabaseError("Database operation failed", operation="transaction") from exc
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """Dispose ``engine``, logging rather than raising on failure."""

    try:
        await engine.dispose()
    except Exception:  # pragma: no cover - best-effort cleanup
        logger.warning("Failed to dispose database engine", exc_info=True)


__all__ = [
    "AsyncSessionFactory",
    "create_engine",
    "dispose_engine",
    "get_session_factory",
    "session_scope",
]
