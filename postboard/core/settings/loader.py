"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process.

Testing:
    In tests, clear the cache to force reload:
    get_app_settings.cache_clear()

    Or construct settings directly:
    settings = AuthSettings(secret_key="test-secret")
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .auth import AuthSettings
from .cache import CacheSettings
from .database import DatabaseSettings
from .graphql import GraphQLSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """Get cached session token settings."""
    return AuthSettings()


@lru_cache(maxsize=1)
def get_cache_settings() -> CacheSettings:
    """Get cached post cache settings."""
    return CacheSettings()


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Get cached GraphQL settings."""
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


def clear_settings_cache() -> None:
    """Drop every cached settings instance (tests and reloads)."""
    for loader in (
        get_app_settings,
        get_db_settings,
        get_auth_settings,
        get_cache_settings,
        get_graphql_settings,
        get_logging_settings,
    ):
        loader.cache_clear()
