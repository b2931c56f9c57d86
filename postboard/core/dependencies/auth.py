"""Authentication dependencies.

Session tokens arrive as ``Authorization: Bearer <token>``. A request without
the header is anonymous. A header that is present but unusable (wrong scheme,
bad signature, expired) is rejected with ``UnauthenticatedError``, which the
application exception handler renders as a 401 problem detail.

Example:
    @router.get("/whoami")
    async def whoami(user: OptionalUser):
        return {"email": user.email if user else None}
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from postboard.core.exceptions import UnauthenticatedError
from postboard.core.settings import get_auth_settings
from postboard.features.users.schemas import TokenClaims
from postboard.features.users.tokens import TokenService
from postboard.infra.logging import set_log_context

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Token service built from AUTH_ settings."""
    return TokenService.from_settings(get_auth_settings())


def parse_bearer(authorization: str) -> str:
    """Extract the token from an Authorization header value.

    Raises:
        UnauthenticatedError: If the scheme is not Bearer or the token is empty.
    """
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME or not token.strip():
        raise UnauthenticatedError("Authorization header must use the Bearer scheme")
    return token.strip()


async def get_current_user_optional(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenClaims | None:
    """Validate the bearer token if one was sent.

    Returns:
        Token claims, or None for an anonymous request.

    Raises:
        UnauthenticatedError: If a token was sent but is invalid or expired.
    """
    if authorization is None:
        return None

    claims = tokens.validate(parse_bearer(authorization))
    set_log_context(user=claims.email, user_id=str(claims.sub))
    return claims


OptionalUser = Annotated[TokenClaims | None, Depends(get_current_user_optional)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
