"""Post mutations and the cached per-user post list."""

from __future__ import annotations

from typing import TYPE_CHECKING

from postboard.core.database import NotFoundError, utcnow
from postboard.core.exceptions import NotFoundException, ValidationFailure
from postboard.core.services import BaseService
from postboard.features.posts.models import Post
from postboard.features.posts.repository import PostRepository, get_post_repository
from postboard.features.posts.schemas import PostRead
from postboard.features.users.repository import UserRepository, get_user_repository

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from postboard.infra.cache import PostCache

DEFAULT_CACHE_TTL = 300


def user_posts_cache_key(user_id: UUID) -> str:
    """Cache key holding one user's post list."""
    return f"posts_user_{user_id}"


class PostService(BaseService):
    """Create, update and delete posts while keeping the per-user cache fresh.

    Every successful mutation commits first and then removes the owner's
    cache entry, so a read that follows the mutation's response can never see
    a pre-mutation snapshot. Failed lookups raise before touching the cache.

    Args:
        session: Request-scoped database session (the service commits it)
        cache: Per-user post list cache
        clock: Source of timestamps for created_at / updated_at
        ttl: Sliding cache lifetime in seconds
    """

    def __init__(
        self,
        session: AsyncSession,
        cache: PostCache,
        *,
        clock: Callable[[], datetime] = utcnow,
        ttl: int = DEFAULT_CACHE_TTL,
        repo: PostRepository | None = None,
        user_repo: UserRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._cache = cache
        self._clock = clock
        self._ttl = ttl
        self._repo = repo or get_post_repository()
        self._user_repo = user_repo or get_user_repository()

    async def create_post(self, content: str, owner_user_id: UUID) -> Post:
        """Persist a new post for an existing user.

        Raises:
            ValidationFailure: If content is empty.
            NotFoundException: If the owner does not exist.
        """
        self._require_content("content", content)

        if await self._user_repo.get(self._session, owner_user_id) is None:
            raise NotFoundException(
                detail="User not found",
                extra={"user_id": str(owner_user_id)},
            )

        now = self._clock()
        post = Post(
            content=content,
            user_id=owner_user_id,
            created_at=now,
            updated_at=None,
            comments=[],
            likes=[],
        )
        await self._repo.create(self._session, post)
        await self._session.commit()
        await self._invalidate(owner_user_id)

        self.logger.info(
            "Post created",
            extra={
                "operation": "service.create_post",
                "post_id": str(post.id),
                "user_id": str(owner_user_id),
            },
        )
        return post

    async def update_post(self, post_id: UUID, new_content: str) -> Post:
        """Replace a post's content.

        Raises:
            NotFoundException: If the post does not exist.
            ValidationFailure: If new_content is empty.
        """
        post = await self._get_post(post_id)
        self._require_content("newContent", new_content)

        post.content = new_content
        post.updated_at = self._clock()
        await self._session.flush()
        await self._session.commit()
        await self._invalidate(post.user_id)

        self.logger.info(
            "Post updated",
            extra={"operation": "service.update_post", "post_id": str(post_id)},
        )
        return post

    async def delete_post(self, post_id: UUID) -> bool:
        """Delete a post along with its comments and likes.

        Raises:
            NotFoundException: If the post does not exist.
        """
        post = await self._get_post(post_id)
        owner_id = post.user_id

        await self._repo.delete(self._session, post)
        await self._session.commit()
        await self._invalidate(owner_id)

        self.logger.info(
            "Post deleted",
            extra={
                "operation": "service.delete_post",
                "post_id": str(post_id),
                "user_id": str(owner_id),
            },
        )
        return True

    async def get_user_posts(self, user_id: UUID) -> list[PostRead]:
        """Return a user's posts newest first, served from cache when possible."""
        key = user_posts_cache_key(user_id)

        cached = await self._cache.get(key)
        if cached is not None:
            self._lazy.debug(lambda: f"service.get_user_posts({user_id}) -> cache hit")
            return [PostRead.model_validate(item) for item in cached]

        rows = await self._repo.list_by_user(self._session, user_id)
        posts = [PostRead.model_validate(row) for row in rows]
        await self._cache.set(key, [post.model_dump(mode="json") for post in posts], self._ttl)

        self._lazy.debug(lambda: f"service.get_user_posts({user_id}) -> {len(posts)} posts from db")
        return posts

    async def _get_post(self, post_id: UUID) -> Post:
        try:
            return await self._repo.get_or_raise(self._session, post_id)
        except NotFoundError as e:
            raise NotFoundException(
                detail="Post not found",
                extra={"post_id": str(post_id)},
            ) from e

    async def _invalidate(self, user_id: UUID) -> None:
        await self._cache.remove(user_posts_cache_key(user_id))
        self._lazy.debug(lambda: f"cache.invalidate: {user_posts_cache_key(user_id)}")

    @staticmethod
    def _require_content(field: str, value: str) -> None:
        if not value or not value.strip():
            raise ValidationFailure({field: ["Content must not be empty"]})
