"""Wiki page models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .revision import Revision


class WikiPageStub(BaseModel):
    """Page identity as returned by list modules."""

    page_id: int | None = Field(default=None, alias="pageid")
    title: str
    namespace_id: int = Field(default=0, alias="ns")
    missing: bool = False
    invalid: bool = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def exists(self) -> bool:
        return not (self.missing or self.invalid)


class WikiPage(WikiPageStub):
    """Page with ``prop=info`` details and optionally its latest revision.

    ``redirect_path`` lists the titles passed through while resolving
    redirects, starting with the requested title; it is empty when the
    page was not reached through a redirect.
    """

    content_model: str | None = Field(default=None, alias="contentmodel")
    page_language: str | None = Field(default=None, alias="pagelanguage")
    touched: datetime | None = None
    last_revision_id: int | None = Field(default=None, alias="lastrevid")
    length: int | None = None
    redirect: bool = False
    redirect_path: tuple[str, ...] = ()
    last_revision: Revision | None = None

    @property
    def content(self) -> str | None:
        return self.last_revision.content if self.last_revision else None
