"""Create/edit form state with the client-side input rules.

These rules are for the user's benefit only; the server validates every
payload again on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from prompt_curator.schemas.prompts import CreatePromptInput, Prompt, UpdatePromptInput

if TYPE_CHECKING:
    from prompt_curator.client.controller import PromptController

MAX_TEXT_LENGTH = 1000
MAX_DESCRIPTION_LENGTH = 200
MAX_TAG_LENGTH = 20
MAX_TAGS = 10

TAG_TOO_LONG = f"Tag must be {MAX_TAG_LENGTH} characters or less"
TAG_DUPLICATE = "Tag already exists"
TAG_LIMIT = f"Maximum {MAX_TAGS} tags allowed"


@dataclass
class PromptForm:
    text: str = ""
    description: str | None = None
    image_url: str | None = None
    tags: list[str] = field(default_factory=list)
    tag_input: str = ""
    tag_error: str = ""
    is_submitting: bool = False
    editing_id: int | None = None

    @classmethod
    def from_prompt(cls, prompt: Prompt) -> "PromptForm":
        return cls(
            text=prompt.text,
            description=prompt.description or None,
            image_url=prompt.image_url or None,
            tags=list(prompt.tags),
            editing_id=prompt.id,
        )

    @property
    def is_edit(self) -> bool:
        return self.editing_id is not None

    def set_text(self, value: str) -> None:
        self.text = value[:MAX_TEXT_LENGTH]

    def set_description(self, value: str | None) -> None:
        self.description = (value or "")[:MAX_DESCRIPTION_LENGTH] or None

    def set_image_url(self, value: str | None) -> None:
        self.image_url = value or None

    def set_tag_input(self, value: str) -> None:
        if value != self.tag_input:
            self.tag_error = ""
        self.tag_input = value

    def add_tag(self, raw: str | None = None) -> str | None:
        """Add the pending tag (or ``raw``); returns the rule it broke, if any."""
        tag = (self.tag_input if raw is None else raw).strip().lower()
        self.tag_error = ""
        if not tag:
            return None

        if len(tag) > MAX_TAG_LENGTH:
            self.tag_error = TAG_TOO_LONG
        elif tag in self.tags:
            self.tag_error = TAG_DUPLICATE
        elif len(self.tags) >= MAX_TAGS:
            self.tag_error = TAG_LIMIT
        else:
            self.tags = [*self.tags, tag]
            self.tag_input = ""
            return None
        return self.tag_error

    def remove_tag(self, tag: str) -> None:
        self.tags = [existing for existing in self.tags if existing != tag]

    @property
    def can_add_tag(self) -> bool:
        return bool(self.tag_input.strip()) and len(self.tags) < MAX_TAGS

    @property
    def can_submit(self) -> bool:
        return bool(self.text.strip()) and not self.is_submitting

    def to_create_input(self) -> CreatePromptInput:
        return CreatePromptInput(
            text=self.text,
            description=self.description,
            image_url=self.image_url,
            tags=list(self.tags),
        )

    def to_update_input(self) -> UpdatePromptInput:
        if self.editing_id is None:
            raise ValueError("Form is not editing an existing prompt.")
        # Every field is sent so a cleared description or image URL is cleared server-side.
        return UpdatePromptInput(
            id=self.editing_id,
            text=self.text,
            description=self.description,
            image_url=self.image_url,
            tags=list(self.tags),
        )

    def submit(self, controller: "PromptController") -> Prompt | None:
        if not self.can_submit:
            return None
        self.is_submitting = True
        try:
            if self.is_edit:
                return controller.update(self.to_update_input())
            return controller.create(self.to_create_input())
        finally:
            self.is_submitting = False
