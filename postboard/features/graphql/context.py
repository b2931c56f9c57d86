"""GraphQL context for request-scoped dependencies.

A fresh context is built for every request by the router's context getter
and carries the database session, the post cache, the token service and the
authenticated user (None for anonymous requests).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

from postboard.core.database import utcnow
from postboard.features.posts.service import DEFAULT_CACHE_TTL, PostService
from postboard.features.users.service import AuthService

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from postboard.features.users.schemas import TokenClaims
    from postboard.features.users.tokens import TokenService
    from postboard.infra.cache import PostCache


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Example usage in resolver:
        @strawberry.field
        async def feed(self, info: Info[GraphQLContext, None], user_id: ID) -> list[PostType]:
            posts = await info.context.post_service().get_user_posts(UUID(user_id))
            return [PostType.from_read(post) for post in posts]
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    session: AsyncSession = field(default=None)  # type: ignore[assignment]
    cache: PostCache = field(default=None)  # type: ignore[assignment]
    tokens: TokenService = field(default=None)  # type: ignore[assignment]
    user: TokenClaims | None = None
    clock: Callable[[], datetime] = utcnow
    cache_ttl: int = DEFAULT_CACHE_TTL

    def post_service(self) -> PostService:
        return PostService(self.session, self.cache, clock=self.clock, ttl=self.cache_ttl)

    def auth_service(self) -> AuthService:
        return AuthService(self.session, self.tokens)


__all__ = ["GraphQLContext"]
