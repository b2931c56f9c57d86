"""Per-user post cache settings."""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from .yaml_sources import DomainSettings


class CacheSettings(DomainSettings):
    """Cache backend configuration.

    Environment variables use CACHE_ prefix.
    Example: CACHE_BACKEND=redis, CACHE_REDIS_URL=redis://localhost:6379/0
    """

    backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Cache backend: in-process memory or Redis",
    )
    ttl_seconds: int = Field(
        default=300,
        ge=1,
        le=86_400,
        description="Sliding freshness window for cached post lists",
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis URL (required when backend is redis)",
    )
    key_prefix: str = Field(
        default="postboard:",
        description="Prefix applied to every Redis key",
    )

    yaml_domain: ClassVar[str] = "cache"

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def _require_redis_url(self) -> CacheSettings:
        if self.backend == "redis" and not self.redis_url:
            msg = "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            raise ValueError(msg)
        return self
