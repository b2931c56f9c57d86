"""Handler registry: every root GraphQL field with its feature and roles.

The registry is plain data assembled at startup. It decides which feature
classes are merged into the root ``Query`` and ``Mutation`` types and which
roles each root field requires. A role set of ``None`` marks a public field.

Example:
    registry = build_registry()
    Query = merge_types("Query", registry.query_types())
    registry.authorize("Mutation", "createPost", user)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from postboard.core.exceptions import ForbiddenError, UnauthenticatedError
from postboard.features.graphql.resolvers.auth_mutations import AuthMutation
from postboard.features.graphql.resolvers.posts_mutations import PostMutation
from postboard.features.graphql.resolvers.posts_queries import PostQuery
from postboard.features.graphql.resolvers.users_queries import UserQuery
from postboard.features.users.models import Role

if TYPE_CHECKING:
    from postboard.features.users.schemas import TokenClaims

logger = logging.getLogger(__name__)

OperationType = Literal["Query", "Mutation"]

PUBLIC: frozenset[str] | None = None
AUTHENTICATED: frozenset[str] = frozenset({Role.USER.value, Role.ADMIN.value})
USER_ONLY: frozenset[str] = frozenset({Role.USER.value})


class RegistryError(RuntimeError):
    """The registry and the composed schema disagree."""


@dataclass(frozen=True, slots=True)
class HandlerSpec:
    """Access rule for one root field (GraphQL field name)."""

    operation: OperationType
    field: str
    feature: str
    roles: frozenset[str] | None = PUBLIC

    @property
    def is_public(self) -> bool:
        return self.roles is None


@dataclass(frozen=True, slots=True)
class FeatureSpec:
    """Root types contributed by one feature."""

    name: str
    query: type | None = None
    mutation: type | None = None


class HandlerRegistry:
    """Lookup table of root-field access rules.

    Raises:
        RegistryError: On construction, if a field is registered twice.
    """

    def __init__(self, features: Sequence[FeatureSpec], handlers: Sequence[HandlerSpec]) -> None:
        self.features = tuple(features)
        self._handlers: dict[tuple[str, str], HandlerSpec] = {}
        for spec in handlers:
            key = (spec.operation, spec.field)
            if key in self._handlers:
                msg = f"{spec.operation}.{spec.field} is registered more than once"
                raise RegistryError(msg)
            self._handlers[key] = spec

    def __iter__(self) -> Iterator[HandlerSpec]:
        return iter(self._handlers.values())

    def __len__(self) -> int:
        return len(self._handlers)

    def lookup(self, operation: str, field: str) -> HandlerSpec | None:
        return self._handlers.get((operation, field))

    def query_types(self) -> tuple[type, ...]:
        return tuple(f.query for f in self.features if f.query is not None)

    def mutation_types(self) -> tuple[type, ...]:
        return tuple(f.mutation for f in self.features if f.mutation is not None)

    def authorize(self, operation: str, field: str, user: TokenClaims | None) -> None:
        """Check that the user may resolve a root field.

        Raises:
            ForbiddenError: If the field is unregistered or the user's role is
                not in the required set.
            UnauthenticatedError: If the field requires a role and there is
                no user.
        """
        spec = self.lookup(operation, field)
        if spec is None:
            raise ForbiddenError(f"{operation}.{field} is not available")
        if spec.roles is None:
            return
        if user is None:
            raise UnauthenticatedError
        if user.role not in spec.roles:
            logger.warning(
                "Access denied",
                extra={"operation": f"{operation}.{field}", "role": user.role},
            )
            raise ForbiddenError

    def verify(self, root_fields: Mapping[str, Iterable[str]]) -> None:
        """Ensure registry entries and schema root fields match exactly.

        Args:
            root_fields: GraphQL field names keyed by root type name

        Raises:
            RegistryError: Listing unregistered and unknown fields.
        """
        schema_keys = {
            (operation, name)
            for operation, names in root_fields.items()
            for name in names
            if not name.startswith("__")
        }
        missing = sorted(f"{op}.{name}" for op, name in schema_keys - self._handlers.keys())
        unknown = sorted(f"{op}.{name}" for op, name in self._handlers.keys() - schema_keys)
        if missing or unknown:
            msg = f"Handler registry mismatch: unregistered={missing} unknown={unknown}"
            raise RegistryError(msg)


def build_registry() -> HandlerRegistry:
    """Assemble the registry for every feature exposed over GraphQL."""
    features = [
        FeatureSpec("auth", mutation=AuthMutation),
        FeatureSpec("posts", query=PostQuery, mutation=PostMutation),
        FeatureSpec("users", query=UserQuery),
    ]
    handlers = [
        HandlerSpec("Mutation", "register", "auth"),
        HandlerSpec("Mutation", "login", "auth"),
        HandlerSpec("Mutation", "createPost", "posts", USER_ONLY),
        HandlerSpec("Mutation", "updatePost", "posts", AUTHENTICATED),
        HandlerSpec("Mutation", "deletePost", "posts", AUTHENTICATED),
        HandlerSpec("Query", "posts", "posts"),
        HandlerSpec("Query", "userPosts", "posts"),
        HandlerSpec("Query", "users", "users"),
        HandlerSpec("Query", "me", "users", AUTHENTICATED),
    ]
    return HandlerRegistry(features, handlers)


__all__ = [
    "AUTHENTICATED",
    "PUBLIC",
    "FeatureSpec",
    "HandlerRegistry",
    "HandlerSpec",
    "USER_ONLY",
    "RegistryError",
    "build_registry",
]
