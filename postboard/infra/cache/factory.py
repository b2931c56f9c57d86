"""Process-wide post cache lifecycle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from postboard.infra.cache.memory import MemoryCache
from postboard.infra.cache.redis import RedisCache

if TYPE_CHECKING:
    from postboard.core.settings import CacheSettings
    from postboard.infra.cache.protocol import PostCache

logger = logging.getLogger(__name__)

_cache: PostCache | None = None


def create_post_cache(settings: CacheSettings) -> PostCache:
    """Build the backend selected by ``CACHE_BACKEND`` (not yet connected)."""
    if settings.backend == "redis":
        return RedisCache(
            settings.redis_url or "",
            key_prefix=settings.key_prefix,
            default_ttl=settings.ttl_seconds,
        )
    return MemoryCache()


async def start_cache(settings: CacheSettings | None = None) -> PostCache:
    """Create and connect the global cache.

    This should be called during application startup.
    """
    global _cache

    if settings is None:
        from postboard.core.settings import get_cache_settings

        settings = get_cache_settings()

    logger.info("Starting post cache", extra={"backend": settings.backend})
    cache = create_post_cache(settings)
    if isinstance(cache, RedisCache):
        await cache.connect()
    _cache = cache
    return cache


async def stop_cache() -> None:
    """Close the global cache.

    This should be called during application shutdown.
    """
    global _cache

    if isinstance(_cache, RedisCache):
        await _cache.disconnect()
    _cache = None
    logger.info("Post cache stopped")


def get_post_cache() -> PostCache:
    """Return the global cache, creating an in-memory one if none was started."""
    global _cache

    if _cache is None:
        _cache = MemoryCache()
    return _cache
