"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode the position in a result set. They
contain the values of the sort fields for a row, so the next query can seek
directly to that position.

Format: URL-safe base64 of a compact JSON object.

    {"v": {"created_at": "2025-01-15T10:30:00", "id": "9b2e..."}}
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError


class CursorData(BaseModel):
    """Decoded cursor payload.

    Attributes:
        values: Dictionary mapping sort field names to their values
    """

    values: dict[str, Any] = Field(description="Sort field values for seeking")

    model_config = {"frozen": True}


class CursorCodec:
    """Encode and decode pagination cursors."""

    @staticmethod
    def encode(data: CursorData) -> str:
        """Encode cursor data to an opaque URL-safe string."""
        payload = {"v": CursorCodec._serialize_values(data.values)}
        json_str = json.dumps(payload, separators=(",", ":"))
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    @staticmethod
    def decode(cursor: str) -> CursorData:
        """Decode a cursor string.

        Raises:
            ValueError: If cursor is invalid or corrupted
        """
        try:
            payload = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
            return CursorData(values=payload["v"])
        except (
            binascii.Error,
            UnicodeDecodeError,
            json.JSONDecodeError,
            KeyError,
            TypeError,
            ValidationError,
        ) as e:
            msg = f"Invalid cursor: {e}"
            raise ValueError(msg) from e

    @staticmethod
    def _serialize_values(values: dict[str, Any]) -> dict[str, Any]:
        """Serialize values to JSON-compatible types (datetime, UUID)."""
        result: dict[str, Any] = {}
        for key, value in values.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, UUID):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    @staticmethod
    def create_cursor(row: Any, sort_fields: list[str]) -> str:
        """Create a cursor from a model instance.

        Example:
            cursor = CursorCodec.create_cursor(post, ["created_at", "id"])
        """
        values = {field: getattr(row, field, None) for field in sort_fields}
        return CursorCodec.encode(CursorData(values=values))


__all__ = ["CursorCodec", "CursorData"]
