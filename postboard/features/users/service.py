"""Registration and login."""

from __future__ import annotations

from typing import TYPE_CHECKING

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError

from postboard.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationFailure,
)
from postboard.core.services import BaseService
from postboard.features.users.models import Role, User
from postboard.features.users.passwords import (
    MAX_PASSWORD_BYTES,
    hash_password,
    placeholder_hash,
    verify_password,
)
from postboard.features.users.repository import UserRepository, get_user_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from postboard.features.users.schemas import UserLogin, UserRegister
    from postboard.features.users.tokens import TokenService

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6


def validate_registration(data: UserRegister) -> dict[str, list[str]]:
    """Collect every rule violation in a registration payload.

    Returns:
        Mapping of field name to messages; empty when the input is valid.
    """
    errors: dict[str, list[str]] = {}

    username = data.username
    if not username.strip():
        errors.setdefault("username", []).append("Username is required")
    elif len(username) < USERNAME_MIN_LENGTH:
        errors.setdefault("username", []).append(
            f"Username must be at least {USERNAME_MIN_LENGTH} characters"
        )
    elif len(username) > USERNAME_MAX_LENGTH:
        errors.setdefault("username", []).append(
            f"Username must be at most {USERNAME_MAX_LENGTH} characters"
        )

    if not data.email.strip():
        errors.setdefault("email", []).append("Email is required")
    else:
        try:
            validate_email(data.email, check_deliverability=False)
        except EmailNotValidError:
            errors.setdefault("email", []).append("Email is not a valid email address")

    password = data.password
    if not password:
        errors.setdefault("password", []).append("Password is required")
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.setdefault("password", []).append(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.setdefault("password", []).append(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )

    return errors


class AuthService(BaseService):
    """Register users and exchange credentials for session tokens.

    The service commits its own unit of work on successful registration.
    """

    def __init__(
        self,
        session: AsyncSession,
        tokens: TokenService,
        repo: UserRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._tokens = tokens
        self._repo = repo or get_user_repository()

    async def register(self, data: UserRegister) -> User:
        """Create a new account with role User.

        Raises:
            ValidationFailure: If any field is invalid (all fields reported).
            DuplicateEmailError: If the email is already registered.
        """
        errors = validate_registration(data)
        if errors:
            self.logger.warning(
                "Registration rejected",
                extra={"operation": "service.register", "fields": sorted(errors)},
            )
            raise ValidationFailure(errors)

        if await self._repo.find_by_email(self._session, data.email) is not None:
            self.logger.warning(
                "Registration failed: email already in use",
                extra={"operation": "service.register", "email": data.email},
            )
            raise DuplicateEmailError(data.email)

        if await self._repo.get_by(self._session, User.username, data.username) is not None:
            raise ValidationFailure({"username": ["Username is already in use"]})

        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            role=Role.USER,
        )
        try:
            await self._repo.create(self._session, user)
            await self._session.commit()
        except IntegrityError as e:
            # Another request registered the same email or username first
            await self._session.rollback()
            if "email" in str(e.orig):
                self.logger.warning(
                    "Registration failed: email already in use",
                    extra={"operation": "service.register", "email": data.email},
                )
                raise DuplicateEmailError(data.email) from e
            if "username" in str(e.orig):
                raise ValidationFailure({"username": ["Username is already in use"]}) from e
            raise

        self.logger.info(
            "User registered",
            extra={"operation": "service.register", "user_id": str(user.id), "email": user.email},
        )
        return user

    async def login(self, data: UserLogin) -> str:
        """Verify credentials and return a signed session token.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match. Both cases are indistinguishable to callers.
        """
        user = await self._repo.find_by_email(self._session, data.email)
        stored_hash = user.password_hash if user is not None else placeholder_hash()
        if not verify_password(data.password, stored_hash) or user is None:
            self.logger.warning(
                "Login failed",
                extra={"operation": "service.login", "email": data.email},
            )
            raise InvalidCredentialsError

        token = self._tokens.issue(user)
        self.logger.info(
            "User logged in",
            extra={"operation": "service.login", "user_id": str(user.id)},
        )
        return token
