"""GraphQL schema assembly.

The root ``Query`` and ``Mutation`` types are merged from the feature classes
listed in the handler registry, and the schema is checked so that every root
field has exactly one registry entry.
"""

from __future__ import annotations

import logging

from strawberry.tools import merge_types

from postboard.features.graphql.error_handler import PostboardSchema
from postboard.features.graphql.extensions import get_extensions
from postboard.features.graphql.registry import HandlerRegistry, build_registry

logger = logging.getLogger(__name__)


def root_fields(schema: PostboardSchema) -> dict[str, list[str]]:
    """GraphQL names of the root Query and Mutation fields."""
    graphql_schema = schema._schema
    fields: dict[str, list[str]] = {}
    for root in (graphql_schema.query_type, graphql_schema.mutation_type):
        if root is not None:
            fields[root.name] = list(root.fields)
    return fields


def build_schema(registry: HandlerRegistry | None = None) -> PostboardSchema:
    """Compose the schema from the registry.

    Raises:
        RegistryError: If a root field lacks a registry entry (or vice versa).
    """
    registry = registry or build_registry()

    query = merge_types("Query", registry.query_types())
    mutation = merge_types("Mutation", registry.mutation_types())
    schema = PostboardSchema(
        query=query,
        mutation=mutation,
        extensions=get_extensions(registry),
    )
    registry.verify(root_fields(schema))

    logger.info(
        "GraphQL schema created",
        extra={"features": [f.name for f in registry.features], "root_fields": len(registry)},
    )
    return schema


schema = build_schema()

__all__ = ["build_schema", "root_fields", "schema"]
