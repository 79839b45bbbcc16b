"""JSON wire codec kept apart from the data contract.

The pydantic models in ``prompts.py`` know nothing about transport; this
module turns raw wire payloads into those models and results back into
JSON-safe values. Both the RPC router and the RPC client go through it.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from prompt_curator.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _issues_from(exc: pydantic.ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def parse_json(raw: str | bytes | None) -> Any:
    """Parse a JSON document, treating an empty payload as ``None``."""
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ValidationError(
            "Malformed JSON input.",
            issues=[{"path": "", "message": str(exc), "type": "json_invalid"}],
        ) from exc


def decode(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a decoded payload against ``model``."""
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        issues = _issues_from(exc)
        summary = "; ".join(f"{issue['path'] or model.__name__}: {issue['message']}" for issue in issues)
        raise ValidationError(f"Invalid {model.__name__}: {summary}", issues=issues) from exc


def decode_optional(model: type[ModelT], payload: Any) -> ModelT | None:
    if payload is None:
        return None
    return decode(model, payload)


def encode(value: Any) -> Any:
    """Convert models, datetimes and containers into JSON-safe values."""
    return to_jsonable_python(value)


def encode_input(model: BaseModel) -> dict[str, Any]:
    """Encode an input model, sending only the fields the caller set."""
    return model.model_dump(mode="json", exclude_unset=True)
