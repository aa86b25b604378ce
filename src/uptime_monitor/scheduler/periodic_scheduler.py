"""
Periodic sweep scheduling for the uptime monitoring system.

This module provides the SweepScheduler, which owns the polling lifecycle:
while running, it launches a sweep on a fixed cadence; at any time it can run
an on-demand sweep for a "check now" action.
"""

import asyncio
import logging
from typing import List, Optional, Set

from uptime_monitor.config.constants import DEFAULT_SWEEP_INTERVAL
from uptime_monitor.domain import ProbeOutcome
from uptime_monitor.worker import MonitoringWorker

# Module logger
logger = logging.getLogger(__name__)


class SweepScheduler:
    """
    Drives periodic sweeps and exposes an on-demand sweep.

    The scheduler is either stopped or running. Each periodic tick launches its
    sweep as an independent task, so a slow sweep never delays the next tick
    and sweeps may overlap. Stopping cancels the timer only: sweeps already in
    flight run to completion and their results are still recorded.
    """

    def __init__(self, worker: MonitoringWorker, interval: int = DEFAULT_SWEEP_INTERVAL) -> None:
        """
        Initializes a new SweepScheduler instance.

        Args:
            worker: The worker that runs sweeps.
            interval: Seconds between two periodic sweeps.

        Raises:
            ValueError: If the interval is not a positive number.
        """
        if not isinstance(interval, (int, float)) or interval <= 0:
            raise ValueError("interval must be a positive number.")

        self._worker: MonitoringWorker = worker
        self._interval = interval
        self._timer_task: Optional[asyncio.Task] = None
        self._sweep_tasks: Set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def sweeps_in_flight(self) -> int:
        return len(self._sweep_tasks)

    async def start(self) -> None:
        """
        Starts the periodic timer. Starting a running scheduler is a no-op.

        The first sweep is launched immediately, the following ones every
        'interval' seconds.
        """
        if self.is_running:
            logger.debug("Scheduler already running, start ignored.")
            return

        logger.info(f"Starting scheduler (interval: {self._interval}s)...")
        self._timer_task = asyncio.create_task(self._run_timer())

    async def stop(self) -> None:
        """
        Stops the periodic timer without cancelling sweeps in flight.
        """
        if not self.is_running:
            return

        logger.info("Stopping scheduler...")
        timer_task = self._timer_task
        self._timer_task = None
        timer_task.cancel()
        await asyncio.gather(timer_task, return_exceptions=True)
        logger.info(f"Scheduler stopped with {self.sweeps_in_flight} sweep(s) still in flight.")

    async def check_now(self) -> List[ProbeOutcome]:
        """
        Runs one sweep immediately and returns its outcomes.

        It is independent of the timer's phase and is also allowed while the
        scheduler is stopped; it never starts the timer.

        Returns:
            List[ProbeOutcome]: One outcome per probed target.

        Raises:
            Exception: If the registry cannot be read.
        """
        logger.info("On-demand sweep requested.")
        return await self._worker.run_sweep()

    async def wait_for_sweeps(self) -> None:
        """
        Waits until every periodic sweep launched so far has finished.
        """
        if self._sweep_tasks:
            logger.info(f"Waiting for {len(self._sweep_tasks)} sweep(s) to complete...")
            await asyncio.gather(*list(self._sweep_tasks), return_exceptions=True)

    async def _run_timer(self) -> None:
        """
        Launches a sweep on every tick until cancelled.

        Ticks are scheduled against the loop clock, so the time spent launching
        a sweep does not make the cadence drift. Ticks missed while the loop was
        stalled are skipped, not replayed.
        """
        loop = asyncio.get_running_loop()
        next_tick = loop.time()

        while True:
            try:
                self._launch_sweep()
                next_tick = self._next_tick(next_tick, loop.time())
                await asyncio.sleep(next_tick - loop.time())
            except asyncio.CancelledError:
                logger.info("Timer stopped.")
                break

    def _next_tick(self, last_tick: float, now: float) -> float:
        next_tick = last_tick + self._interval
        if next_tick < now:
            logger.warning(f"Timer fell behind by {now - next_tick:.2f}s, skipping missed ticks.")
            return now
        return next_tick

    def _launch_sweep(self) -> None:
        task = asyncio.create_task(self._periodic_sweep())
        self._sweep_tasks.add(task)
        task.add_done_callback(self._sweep_tasks.discard)

    async def _periodic_sweep(self) -> None:
        try:
            await self._worker.run_sweep()
        except Exception as e:
            # The next tick retries with a fresh registry read
            logger.exception(f"Periodic sweep failed: {e}")
