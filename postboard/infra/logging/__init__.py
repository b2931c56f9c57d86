"""Logging infrastructure.

Basic usage:
    import logging

    from postboard.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)

    set_log_context(user="alice@example.com")
    logger.info("Processing request")  # record includes user

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Expensive: {compute_heavy_data()}")
"""

from postboard.infra.logging.config import configure_logging, setup_logging
from postboard.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from postboard.infra.logging.formatters import JSONFormatter
from postboard.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
]
