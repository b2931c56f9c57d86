"""Relational store settings."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .yaml_sources import DomainSettings


class DatabaseSettings(DomainSettings):
    """SQLAlchemy engine configuration.

    Environment variables use DB_ prefix.
    Example: DB_URL=sqlite+aiosqlite:///./postboard.db, DB_ECHO=true
    """

    url: str = Field(
        default="sqlite+aiosqlite:///./postboard.db",
        min_length=1,
        description="Async SQLAlchemy database URL",
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")
    create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (no migrations are run)",
    )

    yaml_domain: ClassVar[str] = "db"

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
