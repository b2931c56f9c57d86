"""Users feature: accounts, password hashing, session tokens."""

from __future__ import annotations

from .models import Role, User
from .repository import UserRepository, get_user_repository
from .schemas import TokenClaims, UserLogin, UserRead, UserRegister
from .service import AuthService
from .tokens import TokenService

__all__ = [
    "AuthService",
    "Role",
    "TokenClaims",
    "TokenService",
    "User",
    "UserLogin",
    "UserRead",
    "UserRegister",
    "UserRepository",
    "get_user_repository",
]
