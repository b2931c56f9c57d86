"""Per-user post cache backends."""

from __future__ import annotations

from postboard.infra.cache.factory import (
    create_post_cache,
    get_post_cache,
    start_cache,
    stop_cache,
)
from postboard.infra.cache.memory import MemoryCache
from postboard.infra.cache.protocol import PostCache
from postboard.infra.cache.redis import RedisCache

__all__ = [
    "MemoryCache",
    "PostCache",
    "RedisCache",
    "create_post_cache",
    "get_post_cache",
    "start_cache",
    "stop_cache",
]
