"""FANDOM discussion thread model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiscussionThread(BaseModel):
    """One thread of a FANDOM discussion board."""

    id: str
    title: str | None = None
    forum_id: str | None = Field(default=None, alias="forumId")
    forum_name: str | None = Field(default=None, alias="forumName")
    post_count: int = Field(default=0, alias="postCount", ge=0)
    created_by: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def flatten_nested(cls, data: Any) -> Any:
        """Flatten ``createdBy.name`` and ``creationDate.epochSecond``."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        author = data.pop("createdBy", None)
        if isinstance(author, dict) and "created_by" not in data:
            data["created_by"] = author.get("name")
        created = data.pop("creationDate", None)
        if isinstance(created, dict) and created.get("epochSecond") is not None:
            data.setdefault(
                "created_at", datetime.fromtimestamp(created["epochSecond"], tz=timezone.utc)
            )
        if data.get("id") is not None:
            data["id"] = str(data["id"])
        return data
