"""
Core worker implementation for the uptime monitoring system.

This module provides the MonitoringWorker class, which runs sweeps: it reads
the current targets from the registry, fans them out to a bounded pool of
executor tasks and collects one probe outcome per target. Each executor runs
the per-target pipeline probe -> record -> state check -> notify.
"""

import asyncio
import logging
import time
from asyncio import Queue, Task
from typing import List, Optional, Tuple

from .contracts import TargetProber, TargetRegistry
from .domain import MonitoredTarget, ProbeOutcome, Transition
from .notifier.dispatcher import NotifierDispatcher
from .processor.result_recorder import ResultRecorder
from .state.state_tracker import StateTracker


class MonitoringWorker:
    """
    Coordinates the monitoring workflow for one sweep at a time.

    Sweeps are independent of each other: several may run concurrently, in
    which case the same target can be probed by both. Only updates to one
    target's state are serialized, by the state tracker.
    """

    def __init__(
        self,
        worker_id: str,
        registry: TargetRegistry,
        prober: TargetProber,
        recorder: ResultRecorder,
        tracker: StateTracker,
        dispatcher: NotifierDispatcher,
        num_workers: int,
    ) -> None:
        """
        Initializes a new MonitoringWorker instance.

        Args:
            worker_id: A unique identifier for this worker instance.
            registry: Component that lists the targets to monitor.
            prober: Component that performs HTTP checks on targets.
            recorder: Component that persists probe outcomes.
            tracker: Component that detects up/down transitions.
            dispatcher: Component that creates and delivers notifications.
            num_workers: Maximum number of targets probed concurrently in one sweep.

        Raises:
            ValueError: If num_workers is not a positive integer.
        """
        if not isinstance(num_workers, int) or num_workers < 1:
            raise ValueError("num_workers must be a positive integer.")

        self._worker_id: str = worker_id
        self._registry: TargetRegistry = registry
        self._prober: TargetProber = prober
        self._recorder: ResultRecorder = recorder
        self._tracker: StateTracker = tracker
        self._dispatcher: NotifierDispatcher = dispatcher
        self._num_workers: int = num_workers
        self._logger: logging.Logger = logging.getLogger(__name__)

    async def process_target(self, target: MonitoredTarget) -> Optional[ProbeOutcome]:
        """
        Runs the full pipeline for a single target.

        The stages run strictly in order. A failure in any stage is logged and
        ends this target's pipeline for the current sweep; it never propagates.

        Args:
            target: The target to check.

        Returns:
            Optional[ProbeOutcome]: The probe outcome, even if a later stage
                failed, or None if the probe itself raised unexpectedly.
        """
        try:
            outcome = await self._prober.probe(target)
        except Exception as e:
            self._logger.exception(f"Probe failed for target {target.id} with error: {e}")
            return None

        try:
            await self._recorder.record(outcome)

            transition = await self._tracker.observe(target.id, outcome.is_up)
            if transition is not None:
                await self._notify(target, transition, outcome.error)
        except Exception as e:
            self._logger.exception(f"Pipeline failed for target {target.id} with error: {e}")

        return outcome

    async def _notify(
        self, target: MonitoredTarget, transition: Transition, error: Optional[str]
    ) -> None:
        # The dispatcher only raises when the notification could not be stored
        try:
            await self._dispatcher.dispatch(target, transition, error)
        except Exception:
            await self._tracker.revert(transition)
            raise

    async def _executor(
        self,
        worker_num: int,
        queue: "Queue[Tuple[int, MonitoredTarget]]",
        outcomes: List[Optional[ProbeOutcome]],
    ) -> None:
        """
        Consumer task that processes targets until the sweep's queue is drained.

        Args:
            worker_num: The identifier number of this executor.
            queue: The targets of the current sweep, paired with their position.
            outcomes: Slots receiving each target's outcome, by position.
        """
        executor_logger: logging.Logger = logging.getLogger(f"executor-{worker_num}")

        while True:
            try:
                index, target = queue.get_nowait()
            except asyncio.QueueEmpty:
                executor_logger.debug("Queue drained.")
                return

            outcomes[index] = await self.process_target(target)

    async def run_sweep(self) -> List[ProbeOutcome]:
        """
        Probes every registered target once.

        Targets are processed by at most num_workers concurrent executors, so a
        slow or unreachable target only occupies one of them. Outcomes are
        returned in registry order.

        Returns:
            List[ProbeOutcome]: One outcome per probed target, down ones included.

        Raises:
            Exception: If the registry cannot be read.
        """
        started = time.time()
        targets = await self._registry.list_targets()

        # State of targets deleted since the last sweep is reclaimed
        await self._tracker.retain(target.id for target in targets)

        if not targets:
            self._logger.debug("No targets registered, sweep skipped.")
            return []

        queue: "Queue[Tuple[int, MonitoredTarget]]" = Queue()
        for item in enumerate(targets):
            queue.put_nowait(item)

        outcomes: List[Optional[ProbeOutcome]] = [None] * len(targets)
        executor_count = min(self._num_workers, len(targets))
        self._logger.debug(f"Sweeping {len(targets)} targets with {executor_count} executors.")

        executors: List[Task] = [
            asyncio.create_task(self._executor(i + 1, queue, outcomes))
            for i in range(executor_count)
        ]
        await asyncio.gather(*executors)

        collected = [outcome for outcome in outcomes if outcome is not None]
        down = sum(1 for outcome in collected if not outcome.is_up)
        self._logger.info(
            f"Sweep finished in {time.time() - started:.2f}s: "
            f"{len(collected)}/{len(targets)} probed, {down} down."
        )
        return collected
