"""Cursor-based (keyset) pagination."""

from postboard.core.pagination.cursor import CursorCodec, CursorData
from postboard.core.pagination.filters import CursorFilter
from postboard.core.pagination.schemas import Connection, Edge, PageInfo
from postboard.core.pagination.sequence import paginate_sequence

__all__ = [
    "Connection",
    "CursorCodec",
    "CursorData",
    "CursorFilter",
    "Edge",
    "PageInfo",
    "paginate_sequence",
]
