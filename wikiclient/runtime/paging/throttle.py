"""Request throttler shared by concurrent enumeration sessions.

Work items form a serial queue: each one waits until the previous work item
has finished, then for the configured delay, and only then runs. Using a
throttler therefore forces the guarded operations to run one at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class Throttler:
    """Serializes and spaces out outgoing requests."""

    def __init__(self, delay: float = 0.0) -> None:
        """Initialize throttler.

        Args:
            delay: Seconds to wait before each queued work item runs
        """
        if delay < 0:
            raise ValueError("delay cannot be negative")
        self._delay = delay
        self._last_work: asyncio.Future[None] | None = None
        self._queued_work_count = 0

    @property
    def delay(self) -> float:
        return self._delay

    @delay.setter
    def delay(self, value: float) -> None:
        if value < 0:
            raise ValueError("delay cannot be negative")
        self._delay = value

    @property
    def queued_work_count(self) -> int:
        """Number of queued work items, including the running one."""
        return self._queued_work_count

    @asynccontextmanager
    async def acquire(self, key: str = "work") -> AsyncIterator[None]:
        """Wait for permission to run one work item.

        The work item counts as finished when the ``async with`` block exits,
        whether normally, with an error, or by cancellation.

        Args:
            key: Name of the work, for debugging purpose
        """
        previous = self._last_work
        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._last_work = done
        self._queued_work_count += 1
        try:
            if previous is not None and not previous.done():
                logger.debug("%s: waiting for %d work item(s)", key, self._queued_work_count - 1)
                # Shielded so a cancelled waiter cannot cancel its predecessor's future
                await asyncio.shield(previous)
            if self._delay > 0:
                logger.debug("%s: waiting for delay %.2fs", key, self._delay)
                await asyncio.sleep(self._delay)
            yield
        finally:
            self._queued_work_count -= 1
            if previous is not None and not previous.done():
                # Cancelled while queued: release successors only once the predecessor is done
                previous.add_done_callback(lambda _: _release(done))
            else:
                _release(done)

    async def wait_idle(self) -> None:
        """Wait until every work item queued so far has finished."""
        last = self._last_work
        if last is not None and not last.done():
            await asyncio.shield(last)


def _release(work: asyncio.Future[None]) -> None:
    if not work.done():
        work.set_result(None)
