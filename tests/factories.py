from __future__ import annotations

from datetime import datetime

from prompt_curator.schemas.prompts import Prompt


def make_prompt(
    prompt_id: int,
    text: str,
    tags: list[str] | None = None,
    description: str | None = None,
    created_at: datetime | None = None,
) -> Prompt:
    created = created_at or datetime(2026, 1, 1, 12, 0, prompt_id)
    return Prompt(
        id=prompt_id,
        text=text,
        description=description,
        tags=tags or [],
        created_at=created,
        updated_at=created,
    )
