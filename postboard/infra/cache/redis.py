"""Redis cache backend.

Values are stored as JSON strings. Reads use GETEX so that every hit resets
the key's expiry, giving the same sliding-window behaviour as MemoryCache.
"""

from __future__ import annotations

import json
import logging
from typing import Any, cast

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis-backed cache with sliding expiration.

    Example:
        cache = RedisCache("redis://localhost:6379/0", key_prefix="postboard:")
        await cache.connect()
        await cache.set("posts_user_42", [...], ttl=300)
        await cache.disconnect()
    """

    def __init__(self, url: str, *, key_prefix: str = "", default_ttl: int = 300) -> None:
        self._url = url
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl
        self._client: Redis | None = None

    async def connect(self) -> None:
        """Open the connection pool and verify the server responds.

        Raises:
            redis.exceptions.ConnectionError: If Redis is unreachable.
        """
        logger.info("Connecting to Redis", extra={"key_prefix": self._key_prefix})
        client = Redis.from_url(self._url, decode_responses=True)
        try:
            await cast("Any", client.ping())
        except Exception:
            await client.aclose()
            logger.exception("Failed to connect to Redis")
            raise
        self._client = client
        logger.info("Redis connection established")

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    @property
    def client(self) -> Redis:
        """Connected client.

        Raises:
            RuntimeError: If connect() has not been called.
        """
        if self._client is None:
            msg = "Redis client not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> Any | None:
        raw = await self.client.getex(self._key(key), ex=self._default_ttl)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        await self.client.set(self._key(key), json.dumps(value), ex=ttl)

    async def remove(self, key: str) -> None:
        await self.client.delete(self._key(key))
