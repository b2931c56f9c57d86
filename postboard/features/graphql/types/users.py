"""GraphQL types for users and authentication."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry
from strawberry.types import Info  # noqa: TC002

from postboard.features.graphql.context import GraphQLContext  # noqa: TC001
from postboard.features.graphql.types.base import PageInfoType, SortDirection
from postboard.features.users.schemas import UserRead

if TYPE_CHECKING:
    from postboard.features.graphql.types.posts import PostType
    from postboard.features.users.models import User


@strawberry.type(name="User", description="A registered user")
class UserType:
    id: strawberry.ID
    username: str
    email: str
    role: str
    created_at: datetime

    @strawberry.field(description="Posts by this user, newest first")
    async def posts(
        self,
        info: Info[GraphQLContext, None],
    ) -> list[Annotated["PostType", strawberry.lazy("postboard.features.graphql.types.posts")]]:
        from postboard.features.graphql.types.posts import PostType

        posts = await info.context.post_service().get_user_posts(UUID(str(self.id)))
        return [PostType.from_read(post) for post in posts]

    @classmethod
    def from_read(cls, user: UserRead) -> UserType:
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )

    @classmethod
    def from_model(cls, user: User) -> UserType:
        return cls.from_read(UserRead.model_validate(user))


@strawberry.type(name="UserEdge", description="Edge containing a user node and cursor")
class UserEdge:
    node: UserType
    cursor: str


@strawberry.type(name="UserConnection", description="Paginated list of users")
class UserConnection:
    edges: list[UserEdge]
    page_info: PageInfoType


@strawberry.input(description="Input for registering a new user")
class RegisterInput:
    username: str
    email: str
    password: str


@strawberry.input(description="Credentials exchanged for a session token")
class LoginInput:
    email: str
    password: str


@strawberry.input(description="Filters for the users query")
class UserFilter:
    search: str | None = strawberry.field(
        default=None,
        description="Case-insensitive match on username or email",
    )
    role: str | None = None


@strawberry.enum(description="Fields users can be ordered by")
class UserOrderField(Enum):
    CREATED_AT = "created_at"
    USERNAME = "username"
    EMAIL = "email"


@strawberry.input(description="Ordering for the users query")
class UserOrder:
    field: UserOrderField = UserOrderField.CREATED_AT
    direction: SortDirection = SortDirection.DESC


__all__ = [
    "LoginInput",
    "RegisterInput",
    "UserConnection",
    "UserEdge",
    "UserFilter",
    "UserOrder",
    "UserOrderField",
    "UserType",
]
