"""Flow (structured discussion) topic model."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FlowTopic(BaseModel):
    """One topic of a Flow board, built from its title revision."""

    workflow_id: str = Field(..., alias="workflowId")
    title: str | None = Field(default=None, alias="articleTitle")
    revision_id: str | None = Field(default=None, alias="revisionId")
    topic_title: str | None = None
    timestamp: datetime | None = None
    last_updated: datetime | None = None
    author: str | None = None
    is_locked: bool = Field(default=False, alias="isLocked")
    is_moderated: bool = Field(default=False, alias="isModerated")
    moderation_state: str | None = Field(default=None, alias="moderateState")
    reply_ids: tuple[str, ...] = Field(default=(), alias="replies")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def flatten_nested(cls, data: Any) -> Any:
        """Flatten ``content.content``, ``author.name`` and the timestamps."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        content = data.pop("content", None)
        if isinstance(content, dict):
            data.setdefault("topic_title", content.get("content"))
        author = data.get("author")
        if isinstance(author, dict):
            data["author"] = author.get("name")
        # Flow timestamps are "yyyymmddHHMMSS"; last_updated is in milliseconds
        raw = data.get("timestamp")
        if isinstance(raw, str) and raw.isdigit() and len(raw) == 14:
            data["timestamp"] = datetime.strptime(raw, "%Y%m%d%H%M%S").replace(tzinfo=timezone.utc)
        updated = data.get("last_updated")
        if isinstance(updated, (int, float)) and not isinstance(updated, bool):
            data["last_updated"] = datetime.fromtimestamp(updated / 1000, tz=timezone.utc)
        return data

    @field_validator("workflow_id")
    @classmethod
    def validate_workflow_id(cls, v: str) -> str:
        if not v:
            raise ValueError("workflow_id cannot be empty")
        return v

    @property
    def reply_count(self) -> int:
        """Number of direct replies to the topic's first post."""
        return len(self.reply_ids)
