"""Database engine and session management (async SQLAlchemy)."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from postboard.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

db_settings = get_db_settings()

engine = create_async_engine(db_settings.url, echo=db_settings.echo)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(User))
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Verify connectivity and create missing tables when enabled.

    Raises:
        SQLAlchemyError: If the database cannot be reached.
    """
    # Register every model on Base.metadata before create_all
    import postboard.features.posts.models
    import postboard.features.users.models  # noqa: F401
    from postboard.core.database import Base

    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if db_settings.create_tables:
            await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "Database initialized",
        extra={
            "url": engine.url.render_as_string(hide_password=True),
            "create_tables": db_settings.create_tables,
        },
    )


async def close_database() -> None:
    """Dispose of the engine's connection pool."""
    logger.info("Closing database connection")
    await engine.dispose()


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "engine",
    "get_async_session",
    "init_database",
]
