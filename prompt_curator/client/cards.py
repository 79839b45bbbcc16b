"""Per-card transient UI state and the three card actions."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prompt_curator.client.forms import PromptForm
from prompt_curator.schemas.prompts import Prompt

if TYPE_CHECKING:
    from prompt_curator.client.controller import PromptController

logger = logging.getLogger(__name__)

COPY_FLASH_SECONDS = 2.0
DATE_FORMAT = "%b %d, %Y"


@dataclass
class PromptCard:
    prompt: Prompt
    copied_at: float | None = None
    image_loading: bool = True
    image_error: bool = False
    confirming_delete: bool = False

    @property
    def shows_image(self) -> bool:
        return bool(self.prompt.image_url) and not self.image_error

    @property
    def created_label(self) -> str:
        return f"Created: {self.prompt.created_at.strftime(DATE_FORMAT)}"

    @property
    def updated_label(self) -> str | None:
        if self.prompt.updated_at == self.prompt.created_at:
            return None
        return f"Updated: {self.prompt.updated_at.strftime(DATE_FORMAT)}"

    def mark_image_loaded(self) -> None:
        self.image_loading = False
        self.image_error = False

    def mark_image_failed(self) -> None:
        self.image_loading = False
        self.image_error = True

    def copy_text(self, clipboard: Callable[[str], None]) -> bool:
        try:
            clipboard(self.prompt.text)
        except Exception as exc:
            logger.warning("prompt.copy.failed", extra={"event": "prompt.copy.failed", "error": str(exc)})
            return False
        self.copied_at = time.monotonic()
        return True

    def is_copied(self, now: float | None = None) -> bool:
        if self.copied_at is None:
            return False
        now = time.monotonic() if now is None else now
        return now - self.copied_at < COPY_FLASH_SECONDS

    def edit(self) -> PromptForm:
        return PromptForm.from_prompt(self.prompt)

    def request_delete(self) -> None:
        self.confirming_delete = True

    def cancel_delete(self) -> None:
        self.confirming_delete = False

    def confirm_delete(self, controller: "PromptController") -> bool:
        if not self.confirming_delete:
            return False
        self.confirming_delete = False
        return controller.delete(self.prompt.id)
