"""Password hashing with bcrypt."""

from __future__ import annotations

import functools
import secrets

import bcrypt

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    Raises:
        ValueError: If the encoded password exceeds MAX_PASSWORD_BYTES.
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        msg = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        raise ValueError(msg)
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash
        return False


@functools.cache
def placeholder_hash() -> str:
    """Hash of a random password, checked when a login names no account.

    Running bcrypt on that path keeps unknown-email logins as slow as
    wrong-password ones.
    """
    return hash_password(secrets.token_urlsafe(16))
