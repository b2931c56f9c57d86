"""Fixtures for executing operations against the GraphQL schema directly."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from postboard.features.graphql.context import GraphQLContext
from postboard.features.graphql.schema import schema

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from strawberry.types import ExecutionResult

    from postboard.features.users.models import User
    from postboard.features.users.schemas import TokenClaims


@pytest.fixture
def claims_for(token_service) -> Callable[[User], TokenClaims]:
    """Build validated token claims for a user, as the HTTP layer would."""

    def _claims_for(user: User) -> TokenClaims:
        return token_service.validate(token_service.issue(user))

    return _claims_for


@pytest.fixture
def execute(
    db_session, memory_cache, token_service, clock
) -> Callable[..., Coroutine[Any, Any, ExecutionResult]]:
    """Execute a GraphQL operation with a fresh request context.

    Example:
        result = await execute("{ me { id } }", user=claims)
        assert result.errors is None
    """

    async def _execute(
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        user: TokenClaims | None = None,
    ) -> ExecutionResult:
        context = GraphQLContext(
            session=db_session,
            cache=memory_cache,
            tokens=token_service,
            user=user,
            clock=clock,
        )
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute
