"""Tests for the asyncio ticker."""

import asyncio

import pytest

from fluppy_snake.scheduler import AsyncioTicker


class TestAsyncioTicker:
    @pytest.mark.asyncio
    async def test_calls_back_repeatedly(self):
        calls = []
        ticker = AsyncioTicker(lambda: calls.append(1))
        ticker.start(5)
        await asyncio.sleep(0.1)
        await ticker.aclose()
        assert len(calls) >= 3

    @pytest.mark.asyncio
    async def test_stop_halts_callbacks(self):
        calls = []
        ticker = AsyncioTicker(lambda: calls.append(1))
        ticker.start(5)
        await asyncio.sleep(0.05)
        ticker.stop()
        assert not ticker.running
        assert ticker.interval_ms is None
        count = len(calls)
        await asyncio.sleep(0.05)
        assert len(calls) == count

    @pytest.mark.asyncio
    async def test_invalid_interval(self):
        ticker = AsyncioTicker(lambda: None)
        with pytest.raises(ValueError, match="positive"):
            ticker.start(0)

    @pytest.mark.asyncio
    async def test_restart_replaces_loop(self):
        tasks = []
        ticker = AsyncioTicker(lambda: tasks.append(asyncio.current_task()))
        ticker.start(5)
        await asyncio.sleep(0.03)
        ticker.start(5)
        tasks.clear()
        await asyncio.sleep(0.05)
        await ticker.aclose()
        assert len(set(tasks)) == 1

    @pytest.mark.asyncio
    async def test_reschedule_from_callback(self):
        tasks = []
        ticker = None

        def callback():
            tasks.append(asyncio.current_task())
            if len(tasks) == 1:
                ticker.start(3)

        ticker = AsyncioTicker(callback)
        ticker.start(5)
        await asyncio.sleep(0.08)
        assert ticker.interval_ms == 3
        await ticker.aclose()
        first, *rest = tasks
        assert rest
        assert first not in rest
        assert len(set(rest)) == 1

    @pytest.mark.asyncio
    async def test_callback_error_stops_and_reports(self):
        errors = []

        def boom():
            raise RuntimeError("tick failed")

        ticker = AsyncioTicker(boom, on_error=errors.append)
        ticker.start(5)
        await asyncio.sleep(0.05)
        assert not ticker.running
        assert len(errors) == 1
        assert isinstance(errors[0], RuntimeError)
