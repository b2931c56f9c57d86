"""Cursor pagination over an already ordered in-memory list.

Used where rows come from the post cache or an eager-loaded relationship
instead of a query. Cursors have the same format as keyset cursors, so a
client cannot tell the two apart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from postboard.core.pagination.cursor import CursorCodec
from postboard.core.pagination.schemas import Connection, Edge, PageInfo

if TYPE_CHECKING:
    from collections.abc import Sequence


def paginate_sequence[T](
    items: Sequence[T],
    sort_fields: list[str],
    *,
    first: int | None = None,
    after: str | None = None,
    last: int | None = None,
    before: str | None = None,
) -> Connection[T]:
    """Slice ``items`` into a page and wrap it in a Connection.

    A cursor that matches no item is ignored. ``last``/``before`` page
    backwards when ``first`` is not given; with neither, every item after
    ``after`` is returned. ``total_count`` is always the length of ``items``.
    """
    cursors = [CursorCodec.create_cursor(item, sort_fields) for item in items]
    positions = {cursor: index for index, cursor in enumerate(cursors)}

    backward = last is not None and first is None
    if backward:
        end = positions.get(before, len(items)) if before else len(items)
        start = max(end - last, 0)
    else:
        start = positions[after] + 1 if after in positions else 0
        end = len(items) if first is None else min(start + first, len(items))

    edges = [Edge(node=items[i], cursor=cursors[i]) for i in range(start, end)]
    page_info = PageInfo(
        has_previous_page=start > 0,
        has_next_page=end < len(items),
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
        total_count=len(items),
    )
    return Connection(page_info=page_info, edges=edges)


__all__ = ["paginate_sequence"]
