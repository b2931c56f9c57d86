"""Session token settings."""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from .yaml_sources import DomainSettings


class AuthSettings(DomainSettings):
    """Signing configuration for session tokens.

    Environment variables use AUTH_ prefix.
    Example: AUTH_SECRET_KEY=change-me, AUTH_TOKEN_TTL_HOURS=24
    """

    secret_key: SecretStr = Field(
        default=SecretStr("dev-insecure-secret-key-change-me-in-production"),
        description="Symmetric key used to sign session tokens",
    )
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC signing algorithm",
    )
    token_ttl_hours: int = Field(
        default=24,
        ge=1,
        le=24 * 30,
        description="Session token lifetime in hours",
    )

    yaml_domain: ClassVar[str] = "auth"

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
