"""Tests for cache backend selection and lifecycle."""

from __future__ import annotations

import pytest

from postboard.core.settings import CacheSettings
from postboard.infra.cache import (
    MemoryCache,
    RedisCache,
    create_post_cache,
    get_post_cache,
    start_cache,
    stop_cache,
)


def test_memory_backend_selected_by_default():
    assert isinstance(create_post_cache(CacheSettings(backend="memory")), MemoryCache)


def test_redis_backend_selected_without_connecting():
    cache = create_post_cache(
        CacheSettings(backend="redis", redis_url="redis://localhost:6379/0", ttl_seconds=120)
    )

    assert isinstance(cache, RedisCache)
    with pytest.raises(RuntimeError):
        _ = cache.client


def test_redis_backend_requires_url():
    with pytest.raises(ValueError, match="CACHE_REDIS_URL"):
        CacheSettings(backend="redis", redis_url=None)


async def test_start_and_stop_memory_cache():
    started = await start_cache(CacheSettings(backend="memory"))
    try:
        assert get_post_cache() is started
    finally:
        await stop_cache()

    assert get_post_cache() is not started
    await stop_cache()
