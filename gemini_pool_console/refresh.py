"""Periodic background refresh of the management view."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger()


class RefreshScheduler:
    """Re-runs a refresh coroutine at a fixed interval.

    The loop is independent of user-triggered refreshes and mutations: it is
    never paused for them and may interleave with them.

    Usage:
        scheduler = RefreshScheduler(manager.refresh, interval_seconds=30)
        await scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[object]],
        interval_seconds: float = 30.0,
        *,
        run_immediately: bool = False,
    ) -> None:
        """Initialize the scheduler.

        Args:
            refresh: Coroutine function called once per cycle
            interval_seconds: Delay between cycles
            run_immediately: Run a cycle as soon as the loop starts
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._refresh = refresh
        self._interval = interval_seconds
        self._run_immediately = run_immediately
        self._log = logger.bind(service="refresh_scheduler")

        self._running = False
        self._task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()
        self._cycles = 0

    @property
    def is_running(self) -> bool:
        """Whether the background loop is running."""
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def cycles(self) -> int:
        """Number of completed cycles, failed ones included."""
        return self._cycles

    async def run_once(self) -> None:
        """Execute one refresh cycle. Errors are logged, not raised."""
        try:
            await self._refresh()
        except Exception as e:
            self._log.exception("refresh.cycle_error", error=str(e))
        finally:
            self._cycles += 1

    async def start(self) -> None:
        """Start the background loop. Calling it again while running is a no-op."""
        if self._running:
            self._log.warning("refresh.scheduler.already_running")
            return

        self._running = True
        self._task = asyncio.create_task(self._background_loop())
        self._log.info(
            "refresh.scheduler.started",
            interval_seconds=self._interval,
        )

    async def stop(self) -> None:
        """Stop the background loop.

        Requests already dispatched by a cycle are not cancelled by the
        caller's view teardown; only the timer stops.
        """
        if not self._running:
            return

        self._log.info("refresh.scheduler.stopping")
        self._running = False

        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self._log.info("refresh.scheduler.stopped")

    async def drain(self) -> None:
        """Wait for cycles that are still in flight."""
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    def _dispatch(self) -> None:
        # Each cycle runs in its own task so stopping the timer leaves
        # requests that are already in flight alone.
        task = asyncio.create_task(self.run_once())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _background_loop(self) -> None:
        """Internal background loop."""
        if self._run_immediately:
            self._dispatch()

        while self._running:
            try:
                await asyncio.sleep(self._interval)
            except asyncio.CancelledError:
                break
            self._dispatch()
