"""GraphQL error normalization.

Every error leaving the GraphQL endpoint passes through ``normalize_error``,
which matches once on the fault's ``ErrorKind``:

- validation faults (including duplicate email) become
  ``"Validation failed."`` with ``extensions.validationErrors``;
- every other raised exception becomes ``"Unexpected error occurred."`` with
  ``extensions.errorType`` and ``extensions.details``;
- GraphQL-level errors with no underlying exception (syntax errors, unknown
  fields, depth limit) are returned unchanged.

Usage:
    schema = PostboardSchema(
        query=Query,
        extensions=[ErrorNormalizerExtension],
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

import strawberry
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from postboard.core.exceptions import ErrorKind, ValidationFailure, error_kind_of

if TYPE_CHECKING:
    from collections.abc import Iterator

    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validation failed."
UNEXPECTED_MESSAGE = "Unexpected error occurred."

_EXPECTED_KINDS = frozenset(
    {
        ErrorKind.VALIDATION,
        ErrorKind.DUPLICATE_EMAIL,
        ErrorKind.INVALID_CREDENTIALS,
        ErrorKind.NOT_FOUND,
        ErrorKind.UNAUTHENTICATED,
        ErrorKind.FORBIDDEN,
    }
)


def normalize_error(error: GraphQLError) -> GraphQLError:
    """Map an execution error to the client-facing error shape."""
    original = error.original_error
    if original is None or isinstance(original, GraphQLError):
        return error

    extensions: dict[str, Any]
    match error_kind_of(original):
        case ErrorKind.VALIDATION | ErrorKind.DUPLICATE_EMAIL:
            message = VALIDATION_MESSAGE
            extensions = {"validationErrors": cast("ValidationFailure", original).fields}
        case _:
            message = UNEXPECTED_MESSAGE
            extensions = {"errorType": type(original).__name__, "details": str(original)}

    return GraphQLError(
        message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=original,
        extensions=extensions,
    )


def log_graphql_errors(
    errors: list[GraphQLError],
    execution_context: ExecutionContext | None = None,
) -> None:
    """Log each error: expected faults at WARNING, the rest at ERROR with traceback."""
    operation_name = execution_context.operation_name if execution_context else None

    for error in errors:
        original = error.original_error
        if original is None or isinstance(original, GraphQLError):
            logger.info(
                "GraphQL request error",
                extra={"error_message": error.message, "operation_name": operation_name},
            )
            continue

        kind = error_kind_of(original)
        log_context = {
            "error_kind": kind.value,
            "error_type": type(original).__name__,
            "error_path": ".".join(str(p) for p in error.path or ()),
            "operation_name": operation_name,
        }
        if kind in _EXPECTED_KINDS:
            logger.warning("GraphQL fault: %s", original, extra=log_context)
        else:
            logger.error(
                "Unexpected GraphQL fault: %s",
                original,
                extra=log_context,
                exc_info=(type(original), original, original.__traceback__),
            )


class ErrorNormalizerExtension(SchemaExtension):
    """Rewrite the operation result's errors with ``normalize_error``."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if errors:
            result.errors = [normalize_error(error) for error in errors]  # type: ignore[union-attr]


class PostboardSchema(strawberry.Schema):
    """Strawberry schema that logs faults through ``log_graphql_errors``."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        log_graphql_errors(errors, execution_context)


__all__ = [
    "UNEXPECTED_MESSAGE",
    "VALIDATION_MESSAGE",
    "ErrorNormalizerExtension",
    "PostboardSchema",
    "log_graphql_errors",
    "normalize_error",
]
