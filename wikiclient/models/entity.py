"""Wikibase entity model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WbEntity(BaseModel):
    """Entity returned by ``wbgetentities``.

    Language-keyed value nodes (``{"en": {"language": "en", "value": ...}}``)
    are flattened to plain strings.
    """

    id: str
    type: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    descriptions: dict[str, str] = Field(default_factory=dict)
    aliases: dict[str, list[str]] = Field(default_factory=dict)
    sitelinks: dict[str, str] = Field(default_factory=dict)
    last_revision_id: int | None = Field(default=None, alias="lastrevid")
    missing: bool = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def flatten_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("labels", "descriptions"):
            values = data.get(key)
            if isinstance(values, dict):
                data[key] = {
                    lang: node["value"] if isinstance(node, dict) else node
                    for lang, node in values.items()
                }
        aliases = data.get("aliases")
        if isinstance(aliases, dict):
            data["aliases"] = {
                lang: [a["value"] if isinstance(a, dict) else a for a in nodes]
                for lang, nodes in aliases.items()
            }
        sitelinks = data.get("sitelinks")
        if isinstance(sitelinks, dict):
            data["sitelinks"] = {
                site: node["title"] if isinstance(node, dict) else node
                for site, node in sitelinks.items()
            }
        if data.get("missing") == "":
            data["missing"] = True
        return data

    def label(self, language: str) -> str | None:
        return self.labels.get(language)
