"""Shared API schemas."""

from postboard.core.schemas.problem_details import ProblemDetails

__all__ = ["ProblemDetails"]
