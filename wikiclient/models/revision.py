"""Revision model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Revision(BaseModel):
    """One page revision from ``prop=revisions``."""

    revision_id: int = Field(..., alias="revid")
    parent_id: int | None = Field(default=None, alias="parentid")
    page_id: int | None = Field(default=None, alias="pageid")
    title: str | None = None
    timestamp: datetime | None = None
    user: str | None = None
    user_id: int | None = Field(default=None, alias="userid")
    comment: str | None = None
    size: int | None = Field(default=None, ge=0)
    minor: bool = False
    sha1: str | None = None
    content: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def lift_main_slot(cls, data: Any) -> Any:
        """Lift ``slots.main.content`` (MediaWiki 1.32+) to ``content``."""
        if isinstance(data, dict) and "content" not in data:
            main = (data.get("slots") or {}).get("main") or {}
            if "content" in main:
                data = {**data, "content": main["content"]}
        return data
