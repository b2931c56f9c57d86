"""FastAPI dependencies shared by the HTTP and GraphQL layers."""

from postboard.core.dependencies.auth import (
    OptionalUser,
    TokenServiceDep,
    get_current_user_optional,
    get_token_service,
    parse_bearer,
)
from postboard.core.dependencies.cache import get_cache
from postboard.core.dependencies.database import get_db_session

__all__ = [
    "OptionalUser",
    "TokenServiceDep",
    "get_cache",
    "get_current_user_optional",
    "get_db_session",
    "get_token_service",
    "parse_bearer",
]
