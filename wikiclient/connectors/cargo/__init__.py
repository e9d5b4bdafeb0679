"""Cargo extension connector."""

from .query import (
    CARGO_LIST_KIND,
    SPEC,
    CargoQueryParameters,
    enum_cargo_rows,
    execute_cargo_query,
)

__all__ = [
    "CARGO_LIST_KIND",
    "CargoQueryParameters",
    "SPEC",
    "enum_cargo_rows",
    "execute_cargo_query",
]
