"""Query resolvers for posts.

- posts(first, after, last, before, filter, orderBy): paginated post list
- userPosts(userId, first, after, last, before, filter, orderBy): one user's
  posts paged in memory over the cached list
"""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Annotated

import strawberry
from strawberry.types import Info  # noqa: TC002

from postboard.core.pagination import Connection, paginate_sequence
from postboard.features.graphql.context import GraphQLContext  # noqa: TC001
from postboard.features.graphql.types.base import PageInfoType, SortDirection
from postboard.features.graphql.types.posts import (
    PostConnection,
    PostEdge,
    PostFilter,
    PostOrder,
    PostType,
)
from postboard.features.graphql.utils import page_size, parse_id
from postboard.features.posts.models import Post
from postboard.features.posts.repository import get_post_repository
from postboard.features.posts.schemas import PostListFilters, PostRead

logger = logging.getLogger(__name__)

FirstArg = Annotated[
    int | None, strawberry.argument(description="Number of items to return (forward pagination)")
]
AfterArg = Annotated[
    str | None, strawberry.argument(description="Cursor to start after (forward pagination)")
]
LastArg = Annotated[
    int | None, strawberry.argument(description="Number of items to return (backward pagination)")
]
BeforeArg = Annotated[
    str | None, strawberry.argument(description="Cursor to start before (backward pagination)")
]

_ORDER_COLUMNS = {
    "created_at": Post.created_at,
    "content": Post.content,
}


def _to_list_filters(post_filter: PostFilter | None) -> PostListFilters | None:
    if post_filter is None:
        return None
    return PostListFilters(
        content_contains=post_filter.content_contains,
        user_id=parse_id(post_filter.user_id, "userId") if post_filter.user_id else None,
        created_after=post_filter.created_after,
        created_before=post_filter.created_before,
    )


def _to_connection(connection: Connection[Post] | Connection[PostRead]) -> PostConnection:
    edges = [
        PostEdge(
            node=(
                PostType.from_read(edge.node)
                if isinstance(edge.node, PostRead)
                else PostType.from_model(edge.node)
            ),
            cursor=edge.cursor,
        )
        for edge in connection.edges
    ]
    return PostConnection(
        edges=edges,
        page_info=PageInfoType.from_page_info(connection.page_info),
    )


@strawberry.type
class PostQuery:
    """Post read operations."""

    @strawberry.field(description="List posts with cursor pagination")
    async def posts(
        self,
        info: Info[GraphQLContext, None],
        first: FirstArg = None,
        after: AfterArg = None,
        last: LastArg = None,
        before: BeforeArg = None,
        filter: PostFilter | None = None,  # noqa: A002
        order_by: PostOrder | None = None,
    ) -> PostConnection:
        repo = get_post_repository()
        order = order_by or PostOrder()
        first, last = page_size(first, last)

        connection = await repo.paginate_cursor(
            info.context.session,
            repo.list_statement(_to_list_filters(filter)),
            first=first,
            after=after,
            last=last,
            before=before,
            order_by=[(_ORDER_COLUMNS[order.field.value], order.direction.value)],
            include_total=True,
        )
        return _to_connection(connection)

    @strawberry.field(description="A user's posts with cursor pagination, newest first by default")
    async def user_posts(
        self,
        info: Info[GraphQLContext, None],
        user_id: strawberry.ID,
        first: FirstArg = None,
        after: AfterArg = None,
        last: LastArg = None,
        before: BeforeArg = None,
        filter: PostFilter | None = None,  # noqa: A002
        order_by: PostOrder | None = None,
    ) -> PostConnection:
        owner_id = parse_id(user_id, "userId")
        order = order_by or PostOrder()
        first, last = page_size(first, last)

        posts = await info.context.post_service().get_user_posts(owner_id)
        list_filters = _to_list_filters(filter)
        if list_filters is not None:
            posts = [post for post in posts if list_filters.matches(post)]
        field = order.field.value
        # Stable sort: ties keep the cached newest-first order
        posts.sort(key=attrgetter(field), reverse=order.direction == SortDirection.DESC)

        connection = paginate_sequence(
            posts, [field, "id"], first=first, after=after, last=last, before=before
        )
        return _to_connection(connection)


__all__ = ["PostQuery"]
