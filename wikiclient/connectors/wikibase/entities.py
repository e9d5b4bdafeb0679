"""Wikibase entity lookup (``action=wbgetentities``)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from wikiclient.core.exceptions import UnexpectedDataError
from wikiclient.models import WbEntity
from wikiclient.runtime.paging import partition

if TYPE_CHECKING:
    from wikiclient.connectors.mediawiki import WikiSite

logger = logging.getLogger(__name__)

DEFAULT_PROPS = ("info", "labels", "descriptions", "aliases", "sitelinks")


def _find_entity(entities: Mapping[str, Any], entity_id: str) -> Mapping[str, Any] | None:
    node = entities.get(entity_id)
    if node is not None:
        return node
    # q42 is accepted in requests but the server answers with Q42
    folded = entity_id.casefold()
    for key, value in entities.items():
        if key.casefold() == folded:
            return value
    # With redirects=yes a redirected id is answered under its target
    for value in entities.values():
        source = (value.get("redirects") or {}).get("from") if isinstance(value, Mapping) else None
        if source is not None and source.casefold() == folded:
            return value
    return None


async def fetch_entities(
    site: WikiSite,
    ids: Iterable[str],
    *,
    props: Iterable[str] = DEFAULT_PROPS,
    languages: Iterable[str] | None = None,
    follow_redirects: bool = True,
) -> list[WbEntity]:
    """Fetch Wikibase entities, in input order.

    Ids are sent in batches of ``site.max_multivalue_size()``.

    Args:
        site: Wikibase repository site (e.g. Wikidata's api.php)
        ids: Entity ids such as "Q42" or "P31"
        props: Entity parts to fetch
        languages: Restrict labels/descriptions/aliases to these languages
        follow_redirects: Resolve redirected entities to their targets

    Raises:
        UnexpectedDataError: An entity is absent from the response
    """
    ids = list(ids)
    if not ids:
        return []
    params: dict[str, Any] = {
        "action": "wbgetentities",
        "props": "|".join(props),
        "redirects": "yes" if follow_redirects else "no",
    }
    langs = "|".join(languages or ())
    if langs:
        params["languages"] = langs

    results: list[WbEntity] = []
    for chunk in partition(ids, await site.max_multivalue_size()):
        logger.debug("Fetching %d entities from %s", len(chunk), site.api_endpoint)
        document = await site.execute({**params, "ids": "|".join(chunk)})
        entities = document.get("entities") if isinstance(document, Mapping) else None
        if not isinstance(entities, Mapping):
            raise UnexpectedDataError("wbgetentities response lacks the 'entities' node")
        for entity_id in chunk:
            node = _find_entity(entities, entity_id)
            if node is None:
                raise UnexpectedDataError(f"Cannot find the entity with id {entity_id} in the response")
            try:
                results.append(WbEntity.model_validate(node))
            except ValidationError as e:
                raise UnexpectedDataError(f"Cannot parse entity {entity_id}: {e}") from e
    return results
