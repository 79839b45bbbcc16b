"""Prompt procedures exposed to the client."""

from __future__ import annotations

from datetime import datetime, timezone

from prompt_curator.api.rpc import ProcedureRegistry
from prompt_curator.schemas.prompts import (
    CreatePromptInput,
    DeletePromptInput,
    GetPromptInput,
    HealthStatus,
    Prompt,
    UpdatePromptInput,
)
from prompt_curator.services.prompt_service import PromptService

registry = ProcedureRegistry()


@registry.query("healthcheck")
def healthcheck(service: PromptService, payload: None) -> HealthStatus:
    return HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))


@registry.mutation("createPrompt", CreatePromptInput)
def create_prompt(service: PromptService, payload: CreatePromptInput) -> Prompt:
    return service.create_prompt(payload)


@registry.query("getPrompts")
def get_prompts(service: PromptService, payload: None) -> list[Prompt]:
    return service.get_prompts()


@registry.query("getPrompt", GetPromptInput)
def get_prompt(service: PromptService, payload: GetPromptInput) -> Prompt | None:
    return service.get_prompt(payload)


@registry.mutation("updatePrompt", UpdatePromptInput)
def update_prompt(service: PromptService, payload: UpdatePromptInput) -> Prompt | None:
    return service.update_prompt(payload)


@registry.mutation("deletePrompt", DeletePromptInput)
def delete_prompt(service: PromptService, payload: DeletePromptInput) -> bool:
    return service.delete_prompt(payload)
