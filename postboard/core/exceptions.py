"""Custom exception classes for the application.

Every fault a service raises derives from ``AppException`` and carries an
``ErrorKind`` tag. Boundaries (the GraphQL error normalizer, the FastAPI
exception handlers) match on the kind once instead of on class hierarchies.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Category of a fault, used by the error boundaries."""

    VALIDATION = "validation"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    UNEXPECTED = "unexpected"


def error_kind_of(exc: BaseException | None) -> ErrorKind:
    """Return the kind tag of an exception (UNEXPECTED for untagged ones)."""
    if isinstance(exc, AppException):
        return exc.kind
    return ErrorKind.UNEXPECTED


class AppException(Exception):
    """Base application exception.

    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        kind: Fault category matched by the error boundaries.
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            401: "Unauthorized",
            403: "Forbidden",
            404: "Not Found",
            409: "Conflict",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class ValidationFailure(AppException):
    """Input failed validation on one or more fields.

    All violations are collected before raising, so ``fields`` maps every
    offending field to every message for it.

    Example:
        raise ValidationFailure({
            "username": ["Username must be at least 3 characters"],
            "password": ["Password must be at least 6 characters"],
        })
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        fields: dict[str, list[str]],
        detail: str = "Validation failed",
        status_code: int = 422,
        type: str = "validation-error",
    ) -> None:
        self.fields = {name: list(messages) for name, messages in fields.items()}
        super().__init__(
            status_code=status_code,
            detail=detail,
            type=type,
            title="Validation Error",
            extra={"validation_errors": self.fields},
        )


class DuplicateEmailError(ValidationFailure):
    """Registration attempted with an email that is already in use."""

    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            {"email": ["Email is already in use"]},
            detail="Email is already in use",
            status_code=409,
            type="duplicate-email",
        )


class InvalidCredentialsError(AppException):
    """Login failed.

    The message is the same whether the email is unknown or the password is
    wrong.
    """

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self) -> None:
        super().__init__(
            status_code=401,
            detail="Invalid credentials",
            type="invalid-credentials",
            title="Unauthorized",
        )


class NotFoundException(AppException):
    """Exception raised when a resource is not found.

    Example:
        raise NotFoundException(
            detail="Post not found",
            extra={"post_id": "abc123"},
        )
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class UnauthenticatedError(AppException):
    """Missing, invalid or expired session token."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(
        self,
        detail: str = "Authentication required",
        type: str = "unauthenticated",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=401,
            detail=detail,
            type=type,
            title="Unauthorized",
            extra=extra,
        )


class ForbiddenError(AppException):
    """Authenticated user lacks a role the operation requires."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        detail: str = "Insufficient permissions",
        type: str = "forbidden",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=403,
            detail=detail,
            type=type,
            title="Forbidden",
            extra=extra,
        )


__all__ = [
    "AppException",
    "DuplicateEmailError",
    "ErrorKind",
    "ForbiddenError",
    "InvalidCredentialsError",
    "NotFoundException",
    "UnauthenticatedError",
    "ValidationFailure",
    "error_kind_of",
]
