"""Grouping helpers for side-channel lookups over enumerated items."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


async def batched(source: AsyncIterable[T], size: int) -> AsyncIterator[list[T]]:
    """Group ``source`` into lists of at most ``size`` items, preserving order.

    The trailing batch may be shorter. Nothing is read from ``source`` before
    the consumer asks for the next batch.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    batch: list[T] = []
    async for item in source:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def partition(values: Iterable[Any], size: int) -> list[list[Any]]:
    """Split a finite sequence into consecutive chunks of at most ``size``."""
    if size < 1:
        raise ValueError("size must be at least 1")
    chunks: list[list[Any]] = []
    chunk: list[Any] = []
    for value in values:
        chunk.append(value)
        if len(chunk) >= size:
            chunks.append(chunk)
            chunk = []
    if chunk:
        chunks.append(chunk)
    return chunks
