"""Service layer building blocks."""

from postboard.core.services.base import BaseService

__all__ = ["BaseService"]
