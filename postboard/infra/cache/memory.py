"""In-process cache with sliding expiration."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from postboard.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


@dataclass(slots=True)
class _Entry:
    value: Any
    ttl: float
    expires_at: float


class MemoryCache:
    """Dictionary-backed cache with a sliding TTL per entry.

    Every hit pushes the entry's expiry to ``now + ttl``. Expired entries are
    dropped lazily on access. All operations run on the event loop without
    awaiting, so each one is atomic with respect to other tasks.

    Example:
        cache = MemoryCache()
        await cache.set("posts_user_42", [...], ttl=300)
        posts = await cache.get("posts_user_42")

    Args:
        clock: Monotonic time source in seconds (injectable for tests).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            _lazy.debug(lambda: f"cache.miss: {key}")
            return None

        now = self._clock()
        if now >= entry.expires_at:
            del self._entries[key]
            _lazy.debug(lambda: f"cache.expired: {key}")
            return None

        entry.expires_at = now + entry.ttl
        _lazy.debug(lambda: f"cache.hit: {key}")
        return entry.value

    async def set(self, key: str, value: Any, ttl: int) -> None:
        self._entries[key] = _Entry(value=value, ttl=ttl, expires_at=self._clock() + ttl)
        _lazy.debug(lambda: f"cache.set: {key} (ttl={ttl}s)")

    async def remove(self, key: str) -> None:
        removed = self._entries.pop(key, None) is not None
        _lazy.debug(lambda: f"cache.remove: {key} -> {'removed' if removed else 'absent'}")

    async def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
