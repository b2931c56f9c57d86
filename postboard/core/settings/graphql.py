"""GraphQL server configuration settings.

Controls the GraphQL endpoint, IDE, and query limits.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from .yaml_sources import DomainSettings

GraphQLIDE = Literal["graphiql", "apollo-sandbox", "pathfinder", False]


class GraphQLSettings(DomainSettings):
    """GraphQL server configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_ENABLED=true, GRAPHQL_PATH=/graphql
    """

    enabled: bool = Field(default=True, description="Enable GraphQL endpoint")
    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="GraphQL endpoint path",
    )
    graphql_ide: GraphQLIDE = Field(
        default="graphiql",
        description="GraphQL IDE to serve on GET, or false to disable",
    )
    max_query_depth: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum query nesting depth",
    )
    default_page_size: int = Field(
        default=50,
        ge=1,
        le=100,
        description="Default pagination size for connections",
    )
    max_page_size: int = Field(
        default=100,
        ge=10,
        le=1000,
        description="Maximum pagination size for connections",
    )

    yaml_domain: ClassVar[str] = "graphql"

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def _validate_page_sizes(self) -> GraphQLSettings:
        if self.default_page_size > self.max_page_size:
            msg = "default_page_size cannot exceed max_page_size"
            raise ValueError(msg)
        return self
