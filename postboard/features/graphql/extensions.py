"""Strawberry extensions for the GraphQL schema.

Order matters: access control runs on every resolver, the normalizer rewrites
errors after the operation, and the operation logger records the outcome.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from strawberry.extensions import QueryDepthLimiter, SchemaExtension

from postboard.core.settings import get_graphql_settings
from postboard.features.graphql.error_handler import ErrorNormalizerExtension
from postboard.features.graphql.permissions import AccessControlExtension
from postboard.infra.logging import set_log_context

if TYPE_CHECKING:
    from collections.abc import Iterator

    from postboard.features.graphql.registry import HandlerRegistry

logger = logging.getLogger(__name__)


class OperationLoggingExtension(SchemaExtension):
    """Log one INFO record per GraphQL operation.

    The record holds the query text, elapsed milliseconds, the caller's
    email (or ``Anonymous``) and whether the response carried errors.
    """

    def on_operation(self) -> Iterator[None]:
        execution_context = self.execution_context
        user = getattr(execution_context.context, "user", None)
        user_email = user.email if user is not None else "Anonymous"
        set_log_context(user=user_email, operation=execution_context.operation_name)

        start = time.perf_counter()
        failed = True
        try:
            yield
            result = execution_context.result
            failed = result is None or bool(result.errors)
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000)
            query = (execution_context.query or "EmptyQuery").strip()
            status = "Fail" if failed else "Success"
            logger.info(
                "GraphQL Operation: %s\nTime: %s ms\nUser: %s\nStatus: %s",
                query,
                elapsed_ms,
                user_email,
                status,
                extra={
                    "operation_name": execution_context.operation_name,
                    "duration_ms": elapsed_ms,
                    "status": status,
                },
            )


def get_extensions(registry: HandlerRegistry) -> list:
    """Get list of Strawberry extensions for the schema."""
    settings = get_graphql_settings()
    extensions = [
        OperationLoggingExtension,
        ErrorNormalizerExtension,
        AccessControlExtension(registry=registry),
        QueryDepthLimiter(max_depth=settings.max_query_depth),
    ]

    logger.debug(
        "GraphQL extensions configured",
        extra={"max_query_depth": settings.max_query_depth},
    )
    return extensions


__all__ = ["OperationLoggingExtension", "get_extensions"]
