"""Runtime layer: REST transport and the list enumeration engine."""
