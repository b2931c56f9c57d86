"""Pydantic schemas for the users feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """Registration payload.

    Fields are deliberately unconstrained here; AuthService validates them
    all at once so every violation is reported together.
    """

    username: str = ""
    email: str = ""
    password: str = ""


class UserLogin(BaseModel):
    """Login payload."""

    email: str = ""
    password: str = ""


class UserRead(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    role: str
    created_at: datetime


class TokenClaims(BaseModel):
    """Claims carried by a validated session token."""

    model_config = ConfigDict(frozen=True)

    sub: UUID = Field(description="User id")
    email: str
    role: str
    exp: datetime = Field(description="Expiry (UTC)")

    @property
    def user_id(self) -> UUID:
        return self.sub
