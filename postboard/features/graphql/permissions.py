"""Root-field access control.

``AccessControlExtension`` checks every root field against the handler
registry before its resolver runs. Nested fields are not checked.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from strawberry.extensions import SchemaExtension

if TYPE_CHECKING:
    from collections.abc import Callable

    from graphql import GraphQLResolveInfo

    from postboard.features.graphql.registry import HandlerRegistry


class AccessControlExtension(SchemaExtension):
    """Enforce the registry's role sets on root Query and Mutation fields.

    Example:
        schema = strawberry.Schema(
            query=Query,
            extensions=[AccessControlExtension(registry=build_registry())],
        )
    """

    def __init__(self, *, registry: HandlerRegistry) -> None:
        self.registry = registry

    def resolve(
        self,
        _next: Callable[..., Any],
        root: Any,
        info: GraphQLResolveInfo,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        if info.path.prev is None and not info.field_name.startswith("__"):
            self.registry.authorize(
                info.parent_type.name,
                info.field_name,
                getattr(info.context, "user", None),
            )
        return _next(root, info, *args, **kwargs)


__all__ = ["AccessControlExtension"]
