"""Pydantic schemas for the posts feature.

``PostRead`` is also the cached representation of a post: cache backends
store ``model_dump(mode="json")`` output and reads rebuild it with
``model_validate``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CommentRead(BaseModel):
    """Comment as exposed to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    text: str
    created_at: UtcDatetime
    user_id: UUID


class LikeRead(BaseModel):
    """Like as exposed to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: UtcDatetime
    user_id: UUID


class PostRead(BaseModel):
    """Post with its comments and likes, both newest first."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content: str
    created_at: UtcDatetime
    updated_at: UtcDatetime | None = None
    user_id: UUID
    comments: list[CommentRead] = Field(default_factory=list)
    likes: list[LikeRead] = Field(default_factory=list)
    like_count: int = 0


class PostListFilters(BaseModel):
    """Optional filters for listing posts.

    ``list_statement`` applies them in SQL; ``matches`` applies the same
    rules to cached posts.
    """

    content_contains: str | None = None
    user_id: UUID | None = None
    created_after: UtcDatetime | None = None
    created_before: UtcDatetime | None = None

    def matches(self, post: PostRead) -> bool:
        if self.content_contains and self.content_contains.lower() not in post.content.lower():
            return False
        if self.user_id is not None and post.user_id != self.user_id:
            return False
        if self.created_after is not None and post.created_at <= self.created_after:
            return False
        return self.created_before is None or post.created_at < self.created_before
