"""Search result models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SearchResultItem(BaseModel):
    """One hit of ``list=search``."""

    namespace_id: int = Field(default=0, alias="ns")
    title: str
    page_id: int | None = Field(default=None, alias="pageid")
    size: int | None = None
    word_count: int | None = Field(default=None, alias="wordcount")
    snippet: str | None = None
    timestamp: datetime | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LocalWikiSearchResultItem(BaseModel):
    """One hit of the Wikia ``/Search/List`` API."""

    id: int
    title: str
    url: str | None = None
    namespace_id: int = Field(default=0, alias="ns")
    quality: int = 0
    snippet: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)
