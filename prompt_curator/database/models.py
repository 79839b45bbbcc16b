from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, Text, func
from sqlalchemy import text as sql_text

from .db import Base


def utcnow() -> datetime:
    """Return UTC now as a naive datetime; SQLite drops tzinfo on the way back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Prompt(Base):
    __tablename__ = "prompts"
    # Ids are never handed out again after a delete.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    description = Column(Text)
    image_url = Column(Text)
    tags = Column(JSON, nullable=False, default=list, server_default=sql_text("'[]'"))
    created_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now())

    def __repr__(self) -> str:
        return f"<Prompt id={self.id} tags={self.tags!r}>"
