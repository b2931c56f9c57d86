"""Signed, stateless session tokens."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt
from pydantic import ValidationError

from postboard.core.database import utcnow
from postboard.core.exceptions import UnauthenticatedError
from postboard.features.users.models import Role
from postboard.features.users.schemas import TokenClaims

if TYPE_CHECKING:
    from collections.abc import Callable

    from postboard.core.settings import AuthSettings
    from postboard.features.users.models import User

logger = logging.getLogger(__name__)


class TokenService:
    """Issue and validate HMAC-signed session tokens.

    Tokens carry ``sub`` (user id), ``email``, ``role`` and ``exp``. There is
    no refresh flow and no revocation list; a token is valid until it expires.
    Expiry is checked against the injected clock rather than the library's
    wall clock.

    Example:
        tokens = TokenService(secret_key="s3cret")
        token = tokens.issue(user)
        claims = tokens.validate(token)
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: AuthSettings,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> TokenService:
        return cls(
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
            ttl=timedelta(hours=settings.token_ttl_hours),
            clock=clock,
        )

    def issue(self, user: User) -> str:
        """Sign a token for the user, expiring ``ttl`` after now."""
        expires_at = self._clock() + self._ttl
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "role": str(user.role),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def validate(self, token: str) -> TokenClaims:
        """Verify signature, claims and expiry.

        Raises:
            UnauthenticatedError: If the token is malformed, badly signed,
                carries invalid claims or has expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims.model_validate(payload)
        except (JWTError, ValidationError) as e:
            logger.info("Rejected session token", extra={"reason": type(e).__name__})
            raise UnauthenticatedError("Invalid token") from e

        if claims.role not in {role.value for role in Role}:
            logger.info("Rejected session token", extra={"reason": "unknown_role"})
            raise UnauthenticatedError("Invalid token")

        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        if now > claims.exp:
            raise UnauthenticatedError("Token expired")
        return claims
