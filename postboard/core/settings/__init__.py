"""Modular Pydantic Settings v2 configuration.

One settings class per domain, each with its own environment prefix:

    APP_      application metadata and server bind
    DB_       database URL and startup behaviour
    AUTH_     session token signing
    CACHE_    per-user post cache backend
    GRAPHQL_  endpoint, IDE and paging limits
    LOG_      logging handlers and format

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables (production)
    4. .env file (development only)
    5. secrets_dir (Kubernetes/Docker secrets)
"""

from __future__ import annotations

from .app import AppSettings
from .auth import AuthSettings
from .cache import CacheSettings
from .database import DatabaseSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_auth_settings,
    get_cache_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings

__all__ = [
    "AppSettings",
    "AuthSettings",
    "CacheSettings",
    "DatabaseSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_auth_settings",
    "get_cache_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
]
