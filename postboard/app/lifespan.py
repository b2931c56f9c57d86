"""Application lifespan management.

Startup order: logging, database, cache. Shutdown runs in reverse.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from postboard.core.settings import get_app_settings, get_cache_settings, get_logging_settings
from postboard.infra.cache import start_cache, stop_cache
from postboard.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop application services."""
    from postboard.infra.database import close_database, init_database

    setup_logging(get_logging_settings())
    app_settings = get_app_settings()
    logger.info(
        "Starting application",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    await init_database()
    await start_cache(get_cache_settings())

    try:
        yield
    finally:
        logger.info("Shutting down application")
        await stop_cache()
        await close_database()
