"""Helpers shared by resolvers."""

from __future__ import annotations

from uuid import UUID

from postboard.core.exceptions import ValidationFailure
from postboard.core.settings import get_graphql_settings


def parse_id(value: str, field: str) -> UUID:
    """Convert a GraphQL ID argument to a UUID.

    Raises:
        ValidationFailure: If the value is not a UUID.
    """
    try:
        return UUID(str(value))
    except ValueError as e:
        raise ValidationFailure({field: ["Must be a valid id"]}) from e


def page_size(first: int | None, last: int | None) -> tuple[int | None, int | None]:
    """Apply the configured default and maximum to connection arguments.

    Raises:
        ValidationFailure: If first or last is negative.
    """
    settings = get_graphql_settings()
    errors: dict[str, list[str]] = {}
    for name, value in (("first", first), ("last", last)):
        if value is not None and value < 0:
            errors[name] = ["Must not be negative"]
    if errors:
        raise ValidationFailure(errors)

    if last is not None and first is None:
        return None, min(last, settings.max_page_size)
    limit = first if first is not None else settings.default_page_size
    return min(limit, settings.max_page_size), None
