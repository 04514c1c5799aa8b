"""Unit tests for the refresh scheduler.

Tests scheduler lifecycle, run_once behavior, and in-flight cycles
surviving stop().
"""

from __future__ import annotations

import asyncio

import pytest

from gemini_pool_console.refresh import RefreshScheduler


class FakeRefresh:
    """Counting refresh callable."""

    def __init__(self, error: Exception | None = None):
        self._error = error
        self.run_count = 0

    async def __call__(self) -> None:
        self.run_count += 1
        if self._error is not None:
            raise self._error


class TestRefreshScheduler:
    """Tests for RefreshScheduler."""

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            RefreshScheduler(FakeRefresh(), interval_seconds=0)

    @pytest.mark.asyncio
    async def test_run_once_calls_refresh(self):
        refresh = FakeRefresh()
        scheduler = RefreshScheduler(refresh)

        await scheduler.run_once()

        assert refresh.run_count == 1
        assert scheduler.cycles == 1

    @pytest.mark.asyncio
    async def test_run_once_swallows_refresh_error(self):
        """A failing cycle is logged and does not stop later cycles."""
        refresh = FakeRefresh(error=RuntimeError("boom"))
        scheduler = RefreshScheduler(refresh)

        await scheduler.run_once()
        await scheduler.run_once()

        assert refresh.run_count == 2
        assert scheduler.cycles == 2

    @pytest.mark.asyncio
    async def test_start_stop_lifecycle(self):
        refresh = FakeRefresh()
        scheduler = RefreshScheduler(refresh, interval_seconds=0.05)

        assert not scheduler.is_running

        await scheduler.start()
        assert scheduler.is_running

        # Wait for at least one cycle
        await asyncio.sleep(0.2)

        await scheduler.stop()
        await scheduler.drain()
        assert not scheduler.is_running
        assert refresh.run_count >= 1

    @pytest.mark.asyncio
    async def test_loop_survives_failing_cycles(self):
        refresh = FakeRefresh(error=RuntimeError("gateway down"))
        scheduler = RefreshScheduler(refresh, interval_seconds=0.05)

        await scheduler.start()
        await asyncio.sleep(0.2)
        await scheduler.stop()
        await scheduler.drain()

        assert refresh.run_count >= 2

    @pytest.mark.asyncio
    async def test_run_immediately(self):
        refresh = FakeRefresh()
        scheduler = RefreshScheduler(refresh, interval_seconds=60, run_immediately=True)

        await scheduler.start()
        await asyncio.sleep(0.01)
        await scheduler.stop()
        await scheduler.drain()

        assert refresh.run_count == 1

    @pytest.mark.asyncio
    async def test_no_cycle_before_first_interval(self):
        refresh = FakeRefresh()
        scheduler = RefreshScheduler(refresh, interval_seconds=60)

        await scheduler.start()
        await asyncio.sleep(0.01)
        await scheduler.stop()

        assert refresh.run_count == 0

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        """Calling start() multiple times should not create multiple loops."""
        refresh = FakeRefresh()
        scheduler = RefreshScheduler(refresh, interval_seconds=0.05)

        await scheduler.start()
        await scheduler.start()  # Should be ignored
        await asyncio.sleep(0.12)
        await scheduler.stop()
        await scheduler.drain()

        assert refresh.run_count <= 3

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        scheduler = RefreshScheduler(FakeRefresh())

        # Should not raise
        await scheduler.stop()
        assert not scheduler.is_running

    @pytest.mark.asyncio
    async def test_stop_idempotent(self):
        scheduler = RefreshScheduler(FakeRefresh())

        await scheduler.start()
        await scheduler.stop()
        await scheduler.stop()

        assert not scheduler.is_running

    @pytest.mark.asyncio
    async def test_stop_leaves_inflight_cycle_running(self):
        """Stopping the timer does not cancel a cycle already dispatched."""
        started = asyncio.Event()
        release = asyncio.Event()
        finished = []

        async def slow_refresh() -> None:
            started.set()
            await release.wait()
            finished.append(True)

        scheduler = RefreshScheduler(slow_refresh, interval_seconds=0.01)
        await scheduler.start()
        await started.wait()

        await scheduler.stop()
        release.set()
        await scheduler.drain()

        assert len(finished) >= 1
        assert len(finished) == scheduler.cycles

    @pytest.mark.asyncio
    async def test_restart_after_stop(self):
        refresh = FakeRefresh()
        scheduler = RefreshScheduler(refresh, interval_seconds=0.05)

        await scheduler.start()
        await scheduler.stop()
        await scheduler.start()
        assert scheduler.is_running

        await asyncio.sleep(0.12)
        await scheduler.stop()
        await scheduler.drain()
        assert refresh.run_count >= 1
