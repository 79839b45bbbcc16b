"""Common RPC envelope schema module."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RpcResult(BaseModel):
    status: str = "ok"
    data: Any = None


class ErrorEnvelope(BaseModel):
    status: str = "error"
    error_code: str
    detail: str
    procedure: str | None = None
    issues: list[dict[str, Any]] = Field(default_factory=list)
