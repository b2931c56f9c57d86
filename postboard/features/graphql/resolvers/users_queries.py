"""Query resolvers for users.

- users(first, after, last, before, filter, orderBy): paginated user list
- me: the authenticated user
"""

from __future__ import annotations

import logging
from typing import Annotated

import strawberry
from strawberry.types import Info  # noqa: TC002

from postboard.core.exceptions import NotFoundException, UnauthenticatedError
from postboard.features.graphql.context import GraphQLContext  # noqa: TC001
from postboard.features.graphql.types.base import PageInfoType
from postboard.features.graphql.types.users import (
    UserConnection,
    UserEdge,
    UserFilter,
    UserOrder,
    UserType,
)
from postboard.features.graphql.utils import page_size
from postboard.features.users.models import User
from postboard.features.users.repository import get_user_repository

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
    "created_at": User.created_at,
    "username": User.username,
    "email": User.email,
}


@strawberry.type
class UserQuery:
    """User read operations."""

    @strawberry.field(description="List users with cursor pagination")
    async def users(
        self,
        info: Info[GraphQLContext, None],
        first: FirstArg = None,
        after: AfterArg = None,
        last: LastArg = None,
        before: BeforeArg = None,
        filter: UserFilter | None = None,  # noqa: A002
        order_by: UserOrder | None = None,
    ) -> UserConnection:
        repo = get_user_repository()
        order = order_by or UserOrder()
        first, last = page_size(first, last)

        stmt = repo.list_statement(
            search=filter.search if filter else None,
            role=filter.role if filter else None,
        )
        connection = await repo.paginate_cursor(
            info.context.session,
            stmt,
            first=first,
            after=after,
            last=last,
            before=before,
            order_by=[(_ORDER_COLUMNS[order.field.value], order.direction.value)],
            include_total=True,
        )

        edges = [
            UserEdge(node=UserType.from_model(edge.node), cursor=edge.cursor)
            for edge in connection.edges
        ]
        return UserConnection(
            edges=edges,
            page_info=PageInfoType.from_page_info(connection.page_info),
        )

    @strawberry.field(description="The authenticated user")
    async def me(self, info: Info[GraphQLContext, None]) -> UserType:
        claims = info.context.user
        if claims is None:
            raise UnauthenticatedError

        user = await get_user_repository().get(info.context.session, claims.sub)
        if user is None:
            raise NotFoundException(detail="User not found", extra={"user_id": str(claims.sub)})
        return UserType.from_model(user)


__all__ = ["UserQuery"]
