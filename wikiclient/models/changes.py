"""Recent change and log event models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecentChangeItem(BaseModel):
    """One entry of ``list=recentchanges``."""

    id: int = Field(..., alias="rcid")
    type: str
    namespace_id: int = Field(default=0, alias="ns")
    title: str | None = None
    page_id: int | None = Field(default=None, alias="pageid")
    revision_id: int | None = Field(default=None, alias="revid")
    old_revision_id: int | None = Field(default=None, alias="old_revid")
    user: str | None = None
    timestamp: datetime | None = None
    comment: str | None = None
    old_length: int | None = Field(default=None, alias="oldlen")
    new_length: int | None = Field(default=None, alias="newlen")
    minor: bool = False
    bot: bool = False
    new: bool = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def delta(self) -> int | None:
        if self.old_length is None or self.new_length is None:
            return None
        return self.new_length - self.old_length


class LogEventItem(BaseModel):
    """One entry of ``list=logevents``."""

    log_id: int = Field(..., alias="logid")
    type: str
    action: str
    namespace_id: int = Field(default=0, alias="ns")
    title: str | None = None
    page_id: int | None = Field(default=None, alias="pageid")
    user: str | None = None
    timestamp: datetime | None = None
    comment: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, populate_by_name=True)
