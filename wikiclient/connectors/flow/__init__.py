"""Flow (structured discussions) extension connector."""

from .board import FLOW_TOPICS_LIST_KIND, SPEC, enum_topics

__all__ = [
    "FLOW_TOPICS_LIST_KIND",
    "SPEC",
    "enum_topics",
]
