"""Prompt persistence handlers: create, read, update and delete."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from prompt_curator.core.exceptions import StorageError
from prompt_curator.database.models import Prompt as PromptRow
from prompt_curator.database.models import utcnow
from prompt_curator.schemas.prompts import (
    CreatePromptInput,
    DeletePromptInput,
    GetPromptInput,
    Prompt,
    UpdatePromptInput,
)
from prompt_curator.services.base_service import BaseService

logger = logging.getLogger(__name__)


def _next_timestamp(previous: datetime | None) -> datetime:
    """Current time, nudged forward so it always lands after ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class PromptService(BaseService):
    """Thin transactional wrappers over the prompts table."""

    @contextmanager
    def _storage(self, operation: str, **fields) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.rollback()
            logger.exception(
                "prompt.storage.failed",
                extra={"event": "prompt.storage.failed", "operation": operation, **fields},
            )
            raise StorageError(f"{operation} failed") from exc

    def _find(self, prompt_id: int) -> PromptRow | None:
        return self.db.query(PromptRow).filter(PromptRow.id == prompt_id).first()

    def create_prompt(self, payload: CreatePromptInput) -> Prompt:
        with self._storage("create_prompt"):
            now = utcnow()
            row = PromptRow(
                text=payload.text,
                description=payload.description,
                image_url=payload.image_url,
                tags=list(payload.tags),
                created_at=now,
                updated_at=now,
            )
            self.db.add(row)
            self.commit()
            self.db.refresh(row)

        logger.info("prompt.created", extra={"event": "prompt.created", "prompt_id": row.id})
        return Prompt.model_validate(row)

    def get_prompt(self, payload: GetPromptInput) -> Prompt | None:
        with self._storage("get_prompt", prompt_id=payload.id):
            row = self._find(payload.id)
        if row is None:
            return None
        return Prompt.model_validate(row)

    def get_prompts(self) -> list[Prompt]:
        with self._storage("get_prompts"):
            rows = self.db.query(PromptRow).order_by(PromptRow.id.asc()).all()
        return [Prompt.model_validate(row) for row in rows]

    def update_prompt(self, payload: UpdatePromptInput) -> Prompt | None:
        changes = payload.changes()
        with self._storage("update_prompt", prompt_id=payload.id):
            row = self._find(payload.id)
            if row is None:
                logger.info(
                    "prompt.update.missing",
                    extra={"event": "prompt.update.missing", "prompt_id": payload.id},
                )
                return None

            for column, value in changes.items():
                if column == "tags":
                    value = list(value)
                setattr(row, column, value)
            row.updated_at = _next_timestamp(row.updated_at)
            self.commit()
            self.db.refresh(row)

        logger.info(
            "prompt.updated",
            extra={"event": "prompt.updated", "prompt_id": row.id, "fields": sorted(changes)},
        )
        return Prompt.model_validate(row)

    def delete_prompt(self, payload: DeletePromptInput) -> bool:
        with self._storage("delete_prompt", prompt_id=payload.id):
            deleted = (
                self.db.query(PromptRow)
                .filter(PromptRow.id == payload.id)
                .delete(synchronize_session=False)
            )
            self.commit()

        logger.info(
            "prompt.deleted" if deleted else "prompt.delete.missing",
            extra={"event": "prompt.deleted" if deleted else "prompt.delete.missing", "prompt_id": payload.id},
        )
        return deleted == 1
