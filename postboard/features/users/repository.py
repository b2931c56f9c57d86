"""Repository for the users feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from postboard.core.database import BaseRepository, CollectionFilter, SearchFilter
from postboard.features.users.models import User

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession


class UserRepository(BaseRepository[User]):
    """Repository for User model.

    Inherits from BaseRepository:
        - get(session, id) -> User | None
        - get_or_raise(session, id) -> User
        - get_by(session, attr, value) -> User | None
        - create(session, instance) -> User
        - paginate_cursor(session, statement, ...) -> Connection[User]
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def find_by_email(self, session: AsyncSession, email: str) -> User | None:
        """Get a user by exact email."""
        return await self.get_by(session, User.email, email)

    def list_statement(
        self,
        *,
        search: str | None = None,
        role: str | None = None,
    ) -> Select[tuple[User]]:
        """Build an unordered statement for listing users.

        Args:
            search: Case-insensitive substring matched against username or email
            role: Exact role to keep
        """
        stmt: Select[Any] = select(User)
        stmt = SearchFilter([User.username, User.email], search).apply(stmt)
        if role is not None:
            stmt = CollectionFilter(User.role, [role]).apply(stmt)
        return stmt


_user_repository: UserRepository | None = None


def get_user_repository() -> UserRepository:
    """Get the shared UserRepository instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
