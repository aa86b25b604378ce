"""
Result recording for the uptime monitoring system.

This module turns every probe outcome into an immutable monitoring result in
the result store.
"""

import logging

from uptime_monitor.contracts import ResultStore
from uptime_monitor.domain import MonitoringResult, ProbeOutcome

# Module logger
logger = logging.getLogger(__name__)


class ResultRecorder:
    """
    Persists probe outcomes through a ResultStore.

    The recorder holds no business logic. Store failures propagate to the
    caller, which aborts the pipeline of that one target for the current sweep.
    """

    def __init__(self, worker_id: str, store: ResultStore) -> None:
        """
        Initializes the recorder.

        Args:
            worker_id: A unique identifier for this worker instance.
            store: The store that assigns identifiers and timestamps to results.
        """
        self._worker_id: str = worker_id
        self._store: ResultStore = store

    async def record(self, outcome: ProbeOutcome) -> MonitoringResult:
        """
        Persists a single outcome.

        Args:
            outcome: The outcome of one probe.

        Returns:
            MonitoringResult: The stored record.

        Raises:
            Exception: Whatever the store raised; outcomes are never dropped silently.
        """
        result = await self._store.record_result(outcome)
        logger.debug(f"Recorded result {result.id} for target {outcome.target_id}.")
        return result
