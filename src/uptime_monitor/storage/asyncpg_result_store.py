"""
PostgreSQL-based implementation of the ResultStore interface.
"""

import logging

from asyncpg import Pool

from uptime_monitor.contracts import ResultStore
from uptime_monitor.domain import MonitoringResult, ProbeOutcome

# Module logger
logger = logging.getLogger(__name__)

INSERT_RESULT_QUERY = """
    INSERT INTO monitoring_results (website_id, status_code, response_time, is_up, error)
    VALUES ($1, $2, $3, $4, $5)
    RETURNING id, checked_at
"""


class PostgresResultStore(ResultStore):
    """
    Writes every probe outcome as one row of 'monitoring_results'.

    Unlike a buffered metrics writer, each outcome is written immediately so
    that a failure is reported to the pipeline that produced it.
    """

    def __init__(self, pool: Pool) -> None:
        self._pool: Pool = pool

    async def record_result(self, outcome: ProbeOutcome) -> MonitoringResult:
        """
        Inserts an outcome and returns it with the assigned id and timestamp.

        Raises:
            asyncpg.exceptions.PostgresError: If the insert fails.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                INSERT_RESULT_QUERY,
                outcome.target_id,
                outcome.status_code,
                outcome.response_time_ms,
                outcome.is_up,
                outcome.error,
            )

        return MonitoringResult(
            id=str(row["id"]),
            target_id=outcome.target_id,
            is_up=outcome.is_up,
            status_code=outcome.status_code,
            response_time_ms=outcome.response_time_ms,
            error=outcome.error,
            checked_at=row["checked_at"],
        )
