"""Cache interface used by services."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PostCache(Protocol):
    """Key/value cache with a sliding time-to-live.

    Values must be JSON-compatible so every backend can store them. Reading
    a live entry extends its lifetime by its TTL; removing a missing key is a
    no-op.
    """

    async def get(self, key: str) -> Any | None:
        """Return the cached value (refreshing its TTL) or None on a miss."""
        ...

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value under key for ttl seconds."""
        ...

    async def remove(self, key: str) -> None:
        """Remove key if present."""
        ...
