"""Post cache dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from postboard.infra.cache import get_post_cache

if TYPE_CHECKING:
    from postboard.infra.cache import PostCache


def get_cache() -> PostCache:
    """FastAPI dependency returning the process-wide post cache."""
    return get_post_cache()
