"""Client-side state for the prompt list and its filter controls."""

from __future__ import annotations

import logging

from prompt_curator.client.rpc_client import PromptCuratorClient
from prompt_curator.client.views import (
    ALL_TAGS,
    SORT_NEWEST,
    SORT_OPTIONS,
    TagCount,
    aggregate_tags,
    derive_view,
)
from prompt_curator.core.exceptions import PromptCuratorException
from prompt_curator.schemas.prompts import CreatePromptInput, Prompt, UpdatePromptInput

logger = logging.getLogger(__name__)


class PromptController:
    """Holds the cached prompt list and merges confirmed mutations into it.

    Mutations touch ``prompts`` only after the server answers successfully.
    A failed call is logged, recorded in ``last_error`` and leaves the list
    exactly as it was.
    """

    def __init__(self, client: PromptCuratorClient | None = None) -> None:
        self.client = client or PromptCuratorClient()
        self.prompts: list[Prompt] = []
        self.is_loading = False
        self.last_error: str | None = None
        self.search_query = ""
        self.selected_tag = ALL_TAGS
        self.sort_by = SORT_NEWEST

    def _failed(self, event: str, exc: Exception, **fields) -> None:
        self.last_error = str(exc)
        logger.error(event, extra={"event": event, "error": str(exc), **fields})

    def load(self) -> bool:
        self.is_loading = True
        try:
            prompts = self.client.get_prompts()
        except PromptCuratorException as exc:
            self._failed("prompts.load.failed", exc)
            return False
        finally:
            self.is_loading = False

        self.prompts = prompts
        self.last_error = None
        return True

    def create(self, payload: CreatePromptInput) -> Prompt | None:
        try:
            created = self.client.create_prompt(payload)
        except PromptCuratorException as exc:
            self._failed("prompts.create.failed", exc)
            return None

        self.prompts = [*self.prompts, created]
        self.last_error = None
        return created

    def update(self, payload: UpdatePromptInput) -> Prompt | None:
        try:
            updated = self.client.update_prompt(payload)
        except PromptCuratorException as exc:
            self._failed("prompts.update.failed", exc, prompt_id=payload.id)
            return None

        self.last_error = None
        if updated is not None:
            self.prompts = [updated if prompt.id == updated.id else prompt for prompt in self.prompts]
        return updated

    def delete(self, prompt_id: int) -> bool:
        try:
            deleted = self.client.delete_prompt(prompt_id)
        except PromptCuratorException as exc:
            self._failed("prompts.delete.failed", exc, prompt_id=prompt_id)
            return False

        self.last_error = None
        if deleted:
            self.prompts = [prompt for prompt in self.prompts if prompt.id != prompt_id]
        return deleted

    def set_sort(self, sort_by: str) -> None:
        if sort_by not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort_by!r}")
        self.sort_by = sort_by

    def clear_filters(self) -> None:
        self.search_query = ""
        self.selected_tag = ALL_TAGS
        self.sort_by = SORT_NEWEST

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search_query) or self.selected_tag != ALL_TAGS

    @property
    def can_clear_filters(self) -> bool:
        return self.has_active_filters or self.sort_by != SORT_NEWEST

    @property
    def view(self) -> list[Prompt]:
        return derive_view(self.prompts, self.search_query, self.selected_tag, self.sort_by)

    @property
    def tag_counts(self) -> list[TagCount]:
        return aggregate_tags(self.prompts)
