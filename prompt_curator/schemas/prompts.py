"""Prompt data contract shared by the server and the client."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _InputModel(BaseModel):
    # Wrong primitive types are rejected rather than coerced.
    model_config = ConfigDict(strict=True)


class CreatePromptInput(_InputModel):
    text: str = Field(min_length=1)
    description: str | None
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = None


class UpdatePromptInput(_InputModel):
    """Partial update. Only fields present in the payload are applied.

    An absent field leaves the column unchanged; an explicit ``None`` on a
    nullable field (``description``, ``image_url``) clears it. Presence is read
    from ``model_fields_set``, never from the value.
    """

    id: int
    text: str | None = Field(default=None, min_length=1)
    description: str | None = None
    image_url: str | None = None
    tags: list[str] | None = None

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self) -> "UpdatePromptInput":
        for name in ("text", "tags"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the fields the caller actually sent, minus the id."""
        return self.model_dump(include=self.model_fields_set - {"id"})


class GetPromptInput(_InputModel):
    id: int


class DeletePromptInput(_InputModel):
    id: int


class Prompt(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    description: str | None = None
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class HealthStatus(BaseModel):
    status: str = "ok"
    timestamp: datetime
