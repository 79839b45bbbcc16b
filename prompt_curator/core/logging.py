"""Structured logging helpers for RPC calls."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    procedure: str | None = None
    kind: str | None = None
    prompt_id: int | None = None
    request_id: str = field(default_factory=new_request_id)


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build a normalized structured log payload, suitable for `extra=`."""
    payload: dict[str, Any] = {
        "logged_at": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "procedure": context.procedure,
        "kind": context.kind,
        "prompt_id": context.prompt_id,
        "request_id": context.request_id,
    }
    payload.update(fields)
    return payload
