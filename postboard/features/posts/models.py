"""SQLAlchemy models for the posts feature."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.core.database import Base, CreatedAtMixin, UpdatedAtMixin, UUIDPKMixin

if TYPE_CHECKING:
    from postboard.features.users.models import User


class Post(Base, UUIDPKMixin, CreatedAtMixin, UpdatedAtMixin):
    """A user's post.

    Comments and likes belong to the post and are deleted with it.
    """

    __tablename__ = "posts"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user",
    )

    author: Mapped[User] = relationship(back_populates="posts")
    comments: Mapped[list[Comment]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.desc()",
        lazy="selectin",
    )
    likes: Mapped[list[Like]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Like.created_at.desc()",
        lazy="selectin",
    )

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id})>"


class Comment(Base, UUIDPKMixin, CreatedAtMixin):
    """Comment left on a post."""

    __tablename__ = "comments"

    text: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Comment author",
    )
    post_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    post: Mapped[Post] = relationship(back_populates="comments")


class Like(Base, UUIDPKMixin, CreatedAtMixin):
    """A user's like on a post (at most one per user and post)."""

    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_likes_user_id_post_id"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    post: Mapped[Post] = relationship(back_populates="likes")
