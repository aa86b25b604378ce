"""
PostgreSQL-based implementation of the TargetRegistry interface.
"""

import logging
from typing import List

from asyncpg import Pool, Record

from uptime_monitor.contracts import TargetRegistry
from uptime_monitor.domain import MonitoredTarget

# Module logger
logger = logging.getLogger(__name__)

LIST_TARGETS_QUERY = """
    SELECT id, name, url, check_interval, enable_notifications
    FROM websites
    ORDER BY created_at, id
"""


def map_target(record: Record) -> MonitoredTarget:
    """
    Converts a 'websites' row to a MonitoredTarget domain object.

    Args:
        record: A database record containing website information.

    Returns:
        MonitoredTarget: A domain object representing a monitored website.
    """
    return MonitoredTarget(
        id=str(record["id"]),
        name=record["name"],
        url=record["url"],
        check_interval=int(record["check_interval"]),
        notifications_enabled=bool(record["enable_notifications"]),
    )


class PostgresTargetRegistry(TargetRegistry):
    """
    Reads the monitored websites from the 'websites' table.
    """

    def __init__(self, pool: Pool) -> None:
        self._pool: Pool = pool

    async def list_targets(self) -> List[MonitoredTarget]:
        """
        Returns every registered website.

        Raises:
            Exception: If the table cannot be read.
        """
        async with self._pool.acquire() as conn:
            records = await conn.fetch(LIST_TARGETS_QUERY)

        targets = [map_target(record) for record in records]
        logger.debug(f"Registry returned {len(targets)} target(s).")
        return targets
