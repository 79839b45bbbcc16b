"""Prompt data contract and wire codec."""

from prompt_curator.schemas.prompts import (
    CreatePromptInput,
    DeletePromptInput,
    GetPromptInput,
    HealthStatus,
    Prompt,
    UpdatePromptInput,
)

__all__ = [
    "CreatePromptInput",
    "DeletePromptInput",
    "GetPromptInput",
    "HealthStatus",
    "Prompt",
    "UpdatePromptInput",
]
