"""Composable WHERE-clause helpers for list queries.

Each filter is a small dataclass whose ``apply`` narrows a ``Select`` and
returns it unchanged when the filter has nothing to say (no search text, no
bounds). Repositories chain them:

    stmt = select(Post)
    stmt = SearchFilter(Post.content, "hello").apply(stmt)
    stmt = BeforeAfter(Post.created_at, after=since).apply(stmt)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import false, func, or_

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy import Select
    from sqlalchemy.orm import InstrumentedAttribute

_LIKE_ESCAPE = "\\"


def _like_pattern(text: str) -> str:
    """Case-folded ``%text%`` with LIKE wildcards in the text escaped."""
    escaped = (
        text.lower()
        .replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


@dataclass(slots=True)
class SearchFilter:
    """Case-insensitive substring match on any of the given columns.

    Example:
        SearchFilter([User.username, User.email], "ali").apply(stmt)
        # WHERE lower(username) LIKE '%ali%' OR lower(email) LIKE '%ali%'
    """

    columns: InstrumentedAttribute[Any] | Sequence[InstrumentedAttribute[Any]]
    text: str | None

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if not self.text:
            return statement
        columns = self.columns if isinstance(self.columns, Sequence) else [self.columns]
        pattern = _like_pattern(self.text)
        return statement.where(
            or_(*(func.lower(col).like(pattern, escape=_LIKE_ESCAPE) for col in columns))
        )


@dataclass(slots=True)
class CollectionFilter:
    """``column IN (values)``; an empty collection matches no rows."""

    column: InstrumentedAttribute[Any]
    values: Sequence[Any] = field(default_factory=list)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if not self.values:
            return statement.where(false())
        return statement.where(self.column.in_(list(self.values)))


@dataclass(slots=True)
class BeforeAfter:
    """Exclusive time window on a timestamp column."""

    column: InstrumentedAttribute[Any]
    after: datetime | None = None
    before: datetime | None = None

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if self.after is not None:
            statement = statement.where(self.column > self.after)
        if self.before is not None:
            statement = statement.where(self.column < self.before)
        return statement


__all__ = ["BeforeAfter", "CollectionFilter", "SearchFilter"]
