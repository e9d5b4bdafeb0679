"""Wikibase connector."""

from .entities import fetch_entities

__all__ = ["fetch_entities"]
