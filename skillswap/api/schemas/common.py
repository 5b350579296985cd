from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for payloads using the camelCase field names of the public API."""

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    code: str
    errors: list[dict[str, Any]] | None = Field(default=None)


def flatten_reference(value: Any) -> Any:
    """Collapse a populated ``{"_id": ...}`` reference to its identifier."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return value
