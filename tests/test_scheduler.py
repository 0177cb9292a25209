"""Tests for DebouncedTask."""

import asyncio

import pytest

from linguacheck.utils.scheduler import DebouncedTask


def _counter():
    calls = []

    async def callback():
        calls.append(asyncio.get_running_loop().time())

    return calls, callback


class TestDebouncedTask:
    @pytest.mark.asyncio
    async def test_fires_once_after_delay(self):
        calls, callback = _counter()
        task = DebouncedTask(0.05, callback)
        task.arm()
        assert task.pending
        await asyncio.sleep(0.1)
        assert len(calls) == 1
        assert not task.pending

    @pytest.mark.asyncio
    async def test_rearm_restarts_timer(self):
        calls, callback = _counter()
        task = DebouncedTask(0.1, callback)
        task.arm()
        await asyncio.sleep(0.05)
        task.arm()
        await asyncio.sleep(0.07)
        assert calls == []  # first schedule was dropped
        await asyncio.sleep(0.1)
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_cancel_prevents_call(self):
        calls, callback = _counter()
        task = DebouncedTask(0.03, callback)
        task.arm()
        assert task.cancel() is True
        await asyncio.sleep(0.06)
        assert calls == []

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self):
        calls, callback = _counter()
        task = DebouncedTask(0.03, callback)
        assert task.cancel() is False
        task.arm()
        task.cancel()
        assert task.cancel() is False

    @pytest.mark.asyncio
    async def test_wait_returns_after_callback_finished(self):
        finished = []

        async def slow():
            await asyncio.sleep(0.02)
            finished.append(True)

        task = DebouncedTask(0.02, slow)
        task.arm()
        await task.wait()
        assert finished == [True]
        assert not task.running

    @pytest.mark.asyncio
    async def test_wait_without_schedule_returns_immediately(self):
        _, callback = _counter()
        await asyncio.wait_for(DebouncedTask(10, callback).wait(), timeout=0.5)

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_break_rearm(self):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")

        task = DebouncedTask(0.01, flaky)
        task.arm()
        await asyncio.sleep(0.05)
        task.arm()
        await task.wait()
        assert len(calls) == 2
