"""Context management for structured logging.

Fields set with ``set_log_context`` live in a ContextVar, so each asyncio task
(one per request) sees its own copy. ``ContextInjectingFilter`` copies them
onto every LogRecord so formatters can emit them without explicit passing.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        ```python
        set_log_context(user="alice@example.com", operation="createPost")
        logger.info("Post created")  # record carries user and operation
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current task."""
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvar log context into records.

    Attached to the root logger's handlers through dictConfig:

        "filters": {
            "context": {"()": "postboard.infra.logging.context.ContextInjectingFilter"}
        }
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject context fields, never overwriting existing record attributes."""
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
