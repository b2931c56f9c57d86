"""GraphQL router for FastAPI integration.

Provides the GraphQL endpoint (mounted with the configured path by
app/router.py) and builds a request context from FastAPI dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, Literal, cast

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from strawberry.fastapi import GraphQLRouter

from postboard.core.dependencies.auth import OptionalUser, TokenServiceDep
from postboard.core.dependencies.cache import get_cache
from postboard.core.dependencies.database import get_db_session
from postboard.core.settings import get_cache_settings, get_graphql_settings
from postboard.features.graphql.context import GraphQLContext
from postboard.features.graphql.schema import schema
from postboard.infra.cache import PostCache  # noqa: TC001

if TYPE_CHECKING:
    from postboard.features.graphql.error_handler import PostboardSchema

logger = logging.getLogger(__name__)


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[PostCache, Depends(get_cache)],
    tokens: TokenServiceDep,
    user: OptionalUser,
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    An invalid bearer token fails here, before any GraphQL execution, so the
    client receives HTTP 401 rather than a GraphQL error.
    """
    return GraphQLContext(
        request=request,
        response=response,
        background_tasks=background_tasks,
        session=session,
        cache=cache,
        tokens=tokens,
        user=user,
        cache_ttl=get_cache_settings().ttl_seconds,
    )


def create_graphql_router(graphql_schema: PostboardSchema = schema) -> APIRouter:
    """Create GraphQL router with settings-based configuration."""
    settings = get_graphql_settings()

    selected_ide: Literal["graphiql", "apollo-sandbox", "pathfinder"] | None = None
    if settings.graphql_ide:
        selected_ide = cast(
            "Literal['graphiql', 'apollo-sandbox', 'pathfinder']", settings.graphql_ide
        )

    graphql_app = GraphQLRouter(
        graphql_schema,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=selected_ide,
        path=settings.path,
    )

    router = APIRouter()
    router.include_router(graphql_app)
    return router


__all__ = ["create_graphql_router", "get_graphql_context"]
