"""Generic async repository for SQLAlchemy models.

Repositories take the session as an explicit argument, flush so generated
values are available, and never commit; the calling service owns the unit of
work. Anything beyond simple lookups is written as a statement in the
feature's repository subclass.

Example:
    class UserRepository(BaseRepository[User]):
        async def find_by_email(self, session, email):
            return await self.get_by(session, User.email, email)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import func, select

from postboard.core.database.exceptions import NotFoundError
from postboard.core.pagination import Connection, CursorCodec, CursorFilter, Edge, PageInfo
from postboard.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

    OrderBy = Sequence[tuple[InstrumentedAttribute[Any], Literal["asc", "desc"]]]


class BaseRepository[T]:
    """Lookups, create/delete and cursor pagination for one model."""

    __slots__ = ("_lazy", "_logger", "model")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    @property
    def _pk(self) -> InstrumentedAttribute[Any]:
        return getattr(self.model, "id")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Row with the given primary key, or None."""
        if options:
            result = await session.execute(
                select(self.model).where(self._pk == id).options(*options)
            )
            instance = result.scalar_one_or_none()
        else:
            instance = await session.get(self.model, id)

        self._lazy.debug(lambda: f"db.get {self.model.__name__}({id}) found={instance is not None}")
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Like ``get`` but raises ``NotFoundError`` for a missing row."""
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={"entity": self.model.__name__, "id": str(id)},
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
    ) -> T | None:
        """First row whose ``attr`` equals ``value``."""
        result = await session.execute(select(self.model).where(attr == value).limit(1))
        return result.scalars().first()

    async def create(self, session: AsyncSession, instance: T) -> T:
        session.add(instance)
        await session.flush()
        self._lazy.debug(lambda: f"db.create {self.model.__name__}({instance!r})")
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        await session.delete(instance)
        await session.flush()
        self._lazy.debug(lambda: f"db.delete {instance!r}")

    async def paginate_cursor(
        self,
        session: AsyncSession,
        statement: Select[tuple[T]],
        *,
        order_by: OrderBy,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        default_limit: int = 50,
        include_total: bool = False,
    ) -> Connection[T]:
        """Run a keyset-paginated query and wrap the rows in a Connection.

        ``last``/``before`` page backwards when ``first`` is not given. The
        primary key is appended to ``order_by`` as a tie-breaker.

        Args:
            statement: Filtered, unordered select of the model
            order_by: (column, "asc" | "desc") pairs
            include_total: Also run a COUNT over ``statement``
        """
        backward = last is not None and first is None
        if backward:
            limit, cursor = last, before
        else:
            limit, cursor = (first if first is not None else default_limit), after

        keys = list(order_by)
        if not any(column.key == self._pk.key for column, _ in keys):
            keys.append((self._pk, "asc"))

        page = CursorFilter(
            cursor,
            keys,
            limit=limit,
            direction="before" if backward else "after",
        )
        rows = list((await session.execute(page.apply(statement))).scalars())
        has_more = len(rows) > limit
        rows = rows[:limit]
        if backward:
            rows.reverse()

        total = None
        if include_total:
            total = await session.scalar(select(func.count()).select_from(statement.subquery()))

        edges = [
            Edge(node=row, cursor=CursorCodec.create_cursor(row, page.sort_fields))
            for row in rows
        ]
        page_info = PageInfo(
            has_previous_page=has_more if backward else cursor is not None,
            has_next_page=cursor is not None if backward else has_more,
            start_cursor=edges[0].cursor if edges else None,
            end_cursor=edges[-1].cursor if edges else None,
            total_count=total,
        )
        self._lazy.debug(
            lambda: f"db.paginate {self.model.__name__} limit={limit} -> {len(edges)} rows"
        )
        return Connection(page_info=page_info, edges=edges)


__all__ = ["BaseRepository"]
