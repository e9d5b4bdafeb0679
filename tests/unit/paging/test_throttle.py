"""Unit tests for Throttler."""

from __future__ import annotations

import asyncio

import pytest

from wikiclient.runtime.paging import Throttler


class TestThrottler:
    """Test serialization of work items."""

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            Throttler(-1)
        throttler = Throttler()
        with pytest.raises(ValueError):
            throttler.delay = -0.5

    @pytest.mark.asyncio
    async def test_work_items_run_one_at_a_time(self):
        throttler = Throttler()
        running = 0
        peak = 0
        order = []

        async def work(name):
            nonlocal running, peak
            async with throttler.acquire(name):
                running += 1
                peak = max(peak, running)
                order.append(name)
                await asyncio.sleep(0.01)
                running -= 1

        await asyncio.gather(*(work(i) for i in range(5)))

        assert peak == 1
        assert order == [0, 1, 2, 3, 4]
        assert throttler.queued_work_count == 0

    @pytest.mark.asyncio
    async def test_failing_work_releases_queue(self):
        throttler = Throttler()

        with pytest.raises(RuntimeError):
            async with throttler.acquire("failing"):
                raise RuntimeError("boom")

        async with throttler.acquire("next"):
            pass
        assert throttler.queued_work_count == 0

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_block_queue(self):
        throttler = Throttler()
        entered = []

        async def waiter(name):
            async with throttler.acquire(name):
                entered.append(name)

        async with throttler.acquire("first"):
            blocked = asyncio.create_task(waiter("blocked"))
            await asyncio.sleep(0)
            blocked.cancel()
            with pytest.raises(asyncio.CancelledError):
                await blocked

        await asyncio.wait_for(waiter("after"), timeout=1)
        assert entered == ["after"]

    @pytest.mark.asyncio
    async def test_cancelled_middle_waiter_keeps_serialization(self):
        """Test a successor of a cancelled waiter still waits for the running item."""
        throttler = Throttler()
        running = []
        overlaps = []
        release_first = asyncio.Event()

        async def work(name, hold=None):
            async with throttler.acquire(name):
                if running:
                    overlaps.append((list(running), name))
                running.append(name)
                if hold is not None:
                    await hold.wait()
                running.remove(name)

        first = asyncio.create_task(work("first", release_first))
        await asyncio.sleep(0)
        middle = asyncio.create_task(work("middle"))
        last = asyncio.create_task(work("last"))
        await asyncio.sleep(0)

        middle.cancel()
        with pytest.raises(asyncio.CancelledError):
            await middle
        for _ in range(5):
            await asyncio.sleep(0)
        assert running == ["first"]
        assert not last.done()

        release_first.set()
        await asyncio.wait_for(asyncio.gather(first, last), timeout=1)

        assert overlaps == []
        assert throttler.queued_work_count == 0

    @pytest.mark.asyncio
    async def test_delay_applied_before_each_item(self, monkeypatch):
        delays = []
        real_sleep = asyncio.sleep

        async def fake_sleep(delay):
            delays.append(delay)
            await real_sleep(0)

        monkeypatch.setattr("wikiclient.runtime.paging.throttle.asyncio.sleep", fake_sleep)
        throttler = Throttler(delay=2.5)

        for _ in range(2):
            async with throttler.acquire():
                pass

        assert delays == [2.5, 2.5]

    @pytest.mark.asyncio
    async def test_wait_idle(self):
        throttler = Throttler()
        done = []

        async def work():
            async with throttler.acquire():
                await asyncio.sleep(0.01)
                done.append(True)

        task = asyncio.create_task(work())
        await asyncio.sleep(0)
        await throttler.wait_idle()
        assert done == [True]
        await task
