"""Keyset (seek) pagination over SQLAlchemy selects.

For ``ORDER BY created_at DESC, id ASC`` and a cursor holding ``(t1, id1)``
the seek condition is:

    WHERE created_at < t1 OR (created_at = t1 AND id > id1)

Paging backwards flips every direction, so the same condition walks the
order in reverse; the repository puts the rows back in order afterwards.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Literal
from uuid import UUID

from sqlalchemy import DateTime, Uuid, and_, or_

from postboard.core.pagination.cursor import CursorCodec

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import InstrumentedAttribute

SortDirection = Literal["asc", "desc"]


class CursorFilter:
    """Ordering, seek condition and LIMIT for one page.

    ``limit + 1`` rows are selected so the caller can tell whether another
    page follows. A cursor that cannot be decoded, or whose values do not
    fit the sort columns, is ignored, which yields the first page.

    Example:
        stmt = CursorFilter(
            cursor=after,
            order_by=[(Post.created_at, "desc"), (Post.id, "asc")],
            limit=20,
        ).apply(select(Post))
    """

    def __init__(
        self,
        cursor: str | None,
        order_by: list[tuple[InstrumentedAttribute[Any], SortDirection]],
        *,
        limit: int = 50,
        direction: Literal["after", "before"] = "after",
    ) -> None:
        self.order_by = order_by
        self.limit = limit
        self.direction = direction
        self.values = self._decode(cursor)

    def _decode(self, cursor: str | None) -> dict[str, Any] | None:
        """Sort values from the cursor in column types, or None if unusable."""
        if not cursor:
            return None
        try:
            raw = CursorCodec.decode(cursor).values
            return {
                column.key: _restore(column, raw[column.key])
                for column, _ in self.order_by
                if raw.get(column.key) is not None
            }
        except (ValueError, TypeError, AttributeError):
            return None

    @property
    def sort_fields(self) -> list[str]:
        """Column keys stored in each row's cursor."""
        return [column.key for column, _ in self.order_by]

    def _ascending(self, direction: SortDirection) -> bool:
        return (direction == "asc") != (self.direction == "before")

    def apply(self, statement: Select[Any]) -> Select[Any]:
        for column, direction in self.order_by:
            statement = statement.order_by(
                column.asc() if self._ascending(direction) else column.desc()
            )
        seek = self._seek_condition()
        if seek is not None:
            statement = statement.where(seek)
        return statement.limit(self.limit + 1)

    def _seek_condition(self) -> ColumnElement[bool] | None:
        if not self.values:
            return None

        branches: list[ColumnElement[bool]] = []
        ties: list[ColumnElement[bool]] = []
        for column, direction in self.order_by:
            value = self.values.get(column.key)
            if value is None:
                continue
            past = column > value if self._ascending(direction) else column < value
            branches.append(and_(*ties, past) if ties else past)
            ties.append(column == value)

        return or_(*branches) if branches else None


def _restore(column: InstrumentedAttribute[Any], value: Any) -> Any:
    """Turn a JSON cursor value back into the column's Python type.

    Raises:
        ValueError: The value is malformed for the column
        TypeError: The value has the wrong JSON type for the column
    """
    if isinstance(column.type, DateTime):
        return datetime.fromisoformat(value)
    if isinstance(column.type, Uuid):
        return UUID(value)
    return value


__all__ = ["CursorFilter"]
