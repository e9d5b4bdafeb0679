"""Per-backend connectors (MediaWiki api.php, Cargo, Flow, Wikia/FANDOM, Wikibase)."""
