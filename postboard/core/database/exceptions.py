"""Repository-level lookup failures.

Services translate these into ``postboard.core.exceptions`` faults; they
never reach a client directly.
"""

from __future__ import annotations

from typing import Any


class NotFoundError(Exception):
    """No row of ``model_name`` matched ``identifier``.

    Example:
        raise NotFoundError("Post", {"id": post_id})
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]) -> None:
        self.model_name = model_name
        self.identifier = dict(identifier)
        keys = ", ".join(f"{key}={value}" for key, value in self.identifier.items())
        super().__init__(f"{model_name} not found ({keys})")
