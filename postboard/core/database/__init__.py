"""Database building blocks: declarative base, repository, statement filters."""

from postboard.core.database.base import (
    Base,
    CreatedAtMixin,
    UpdatedAtMixin,
    UUIDPKMixin,
    utcnow,
)
from postboard.core.database.exceptions import NotFoundError
from postboard.core.database.filters import (
    BeforeAfter,
    CollectionFilter,
    SearchFilter,
)
from postboard.core.database.repository import BaseRepository

__all__ = [
    "Base",
    "BaseRepository",
    "BeforeAfter",
    "CollectionFilter",
    "CreatedAtMixin",
    "NotFoundError",
    "SearchFilter",
    "UUIDPKMixin",
    "UpdatedAtMixin",
    "utcnow",
]
