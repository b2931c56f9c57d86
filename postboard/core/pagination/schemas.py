"""Relay-style connection containers returned by cursor pagination."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class PageInfo:
    """Pagination metadata following the GraphQL Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
        total_count: Total number of items (only when requested)
    """

    has_previous_page: bool
    has_next_page: bool
    start_cursor: str | None = None
    end_cursor: str | None = None
    total_count: int | None = None


@dataclass(slots=True, frozen=True)
class Edge[T]:
    """A node and its cursor."""

    node: T
    cursor: str


@dataclass(slots=True, frozen=True)
class Connection[T]:
    """A page of edges plus navigation metadata."""

    page_info: PageInfo
    edges: list[Edge[T]] = field(default_factory=list)

    @property
    def nodes(self) -> list[T]:
        """Nodes without their edge wrappers."""
        return [edge.node for edge in self.edges]


__all__ = ["Connection", "Edge", "PageInfo"]
