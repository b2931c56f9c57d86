"""Base GraphQL types for pagination and ordering."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from postboard.core.pagination import PageInfo


@strawberry.type(
    name="PageInfo",
    description="Pagination metadata following GraphQL Relay specification",
)
class PageInfoType:
    """GraphQL Relay PageInfo for cursor-based pagination."""

    has_previous_page: bool = strawberry.field(description="Whether previous items exist")
    has_next_page: bool = strawberry.field(description="Whether more items exist")
    start_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the last item",
    )
    total_count: int | None = strawberry.field(
        default=None,
        description="Total number of items matching the filter",
    )

    @classmethod
    def from_page_info(cls, page_info: PageInfo) -> PageInfoType:
        return cls(
            has_previous_page=page_info.has_previous_page,
            has_next_page=page_info.has_next_page,
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
            total_count=page_info.total_count,
        )


@strawberry.enum(description="Sort direction")
class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


__all__ = ["PageInfoType", "SortDirection"]
