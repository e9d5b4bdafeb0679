"""Site information model."""

from __future__ import annotations

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


class SiteInfo(BaseModel):
    """General site information from ``meta=siteinfo&siprop=general``."""

    site_name: str = Field(..., alias="sitename")
    main_page: str = Field(default="", alias="mainpage")
    generator: str = ""
    server: str = ""
    script_path: str = Field(default="", alias="scriptpath")
    article_path: str = Field(default="/wiki/$1", alias="articlepath")
    language: str = Field(default="", alias="lang")
    time_zone: str = Field(default="UTC", alias="timezone")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def version(self) -> str:
        """MediaWiki version string, e.g. "1.41.0" from "MediaWiki 1.41.0"."""
        return self.generator.removeprefix("MediaWiki").strip()

    def article_url(self, title: str) -> str:
        """Absolute URL of the article ``title``."""
        path = self.article_path.replace("$1", quote(title.replace(" ", "_"), safe="/:"))
        return f"{self.server}{path}"
