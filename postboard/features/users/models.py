"""SQLAlchemy models for the users feature."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.core.database import Base, CreatedAtMixin, UUIDPKMixin

if TYPE_CHECKING:
    from postboard.features.posts.models import Post


class Role(StrEnum):
    """Roles a user can hold. Stored by value."""

    USER = "User"
    ADMIN = "Admin"


class User(Base, UUIDPKMixin, CreatedAtMixin):
    """Registered account.

    Created on registration and never modified or deleted afterwards. The
    password is only ever stored as a bcrypt hash.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="Display name, 3-50 characters",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login identifier, stored as given",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash including salt",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=Role.USER,
        comment="User or Admin",
    )

    posts: Mapped[list[Post]] = relationship(back_populates="author")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role})>"
