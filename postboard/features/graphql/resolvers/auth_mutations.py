"""Mutation resolvers for registration and login.

- register(input): create an account with role User
- login(input): exchange credentials for a session token
"""

from __future__ import annotations

import logging

import strawberry
from strawberry.types import Info  # noqa: TC002

from postboard.features.graphql.context import GraphQLContext  # noqa: TC001
from postboard.features.graphql.types.users import LoginInput, RegisterInput, UserType
from postboard.features.users.schemas import UserLogin, UserRegister

logger = logging.getLogger(__name__)


@strawberry.type
class AuthMutation:
    """Public authentication mutations."""

    @strawberry.mutation(description="Register a new user")
    async def register(
        self,
        info: Info[GraphQLContext, None],
        input: RegisterInput,  # noqa: A002
    ) -> UserType:
        data = UserRegister(username=input.username, email=input.email, password=input.password)
        user = await info.context.auth_service().register(data)
        return UserType.from_model(user)

    @strawberry.mutation(description="Log in and receive a session token")
    async def login(
        self,
        info: Info[GraphQLContext, None],
        input: LoginInput,  # noqa: A002
    ) -> str:
        data = UserLogin(email=input.email, password=input.password)
        return await info.context.auth_service().login(data)


__all__ = ["AuthMutation"]
