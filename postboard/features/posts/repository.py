"""Repository for the posts feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from postboard.core.database import BaseRepository, BeforeAfter, SearchFilter
from postboard.features.posts.models import Post

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from postboard.features.posts.schemas import PostListFilters


class PostRepository(BaseRepository[Post]):
    """Repository for Post model.

    Inherits from BaseRepository:
        - get(session, id) -> Post | None
        - get_or_raise(session, id) -> Post
        - create(session, instance) -> Post
        - delete(session, instance) -> None
        - paginate_cursor(session, statement, ...) -> Connection[Post]
    """

    def __init__(self) -> None:
        super().__init__(Post)

    async def list_by_user(self, session: AsyncSession, user_id: UUID) -> Sequence[Post]:
        """All posts of one user, newest first (ties broken by id)."""
        stmt = (
            select(Post)
            .where(Post.user_id == user_id)
            .order_by(Post.created_at.desc(), Post.id.asc())
        )
        result = await session.execute(stmt)
        posts = result.scalars().all()

        self._lazy.debug(lambda: f"db.list_by_user({user_id}) -> {len(posts)} posts")
        return posts

    def list_statement(self, filters: PostListFilters | None = None) -> Select[tuple[Post]]:
        """Build an unordered statement for listing posts."""
        stmt: Select[Any] = select(Post)
        if filters is None:
            return stmt

        stmt = SearchFilter(Post.content, filters.content_contains).apply(stmt)
        if filters.user_id is not None:
            stmt = stmt.where(Post.user_id == filters.user_id)
        return BeforeAfter(
            Post.created_at,
            after=filters.created_after,
            before=filters.created_before,
        ).apply(stmt)


_post_repository: PostRepository | None = None


def get_post_repository() -> PostRepository:
    """Get the shared PostRepository instance."""
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository
