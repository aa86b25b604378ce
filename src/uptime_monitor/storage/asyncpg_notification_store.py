"""
PostgreSQL-based implementation of the NotificationStore interface.
"""

import logging

from asyncpg import Pool, Record

from uptime_monitor.contracts import NotificationStore
from uptime_monitor.domain import Notification, NotificationKind

# Module logger
logger = logging.getLogger(__name__)

INSERT_NOTIFICATION_QUERY = """
    INSERT INTO notifications (website_id, type, message, email_sent, sms_sent)
    VALUES ($1, $2, $3, false, false)
    RETURNING id, website_id, type, message, email_sent, sms_sent, created_at
"""

MARK_EMAIL_SENT_QUERY = "UPDATE notifications SET email_sent = true WHERE id = $1"

MARK_SMS_SENT_QUERY = "UPDATE notifications SET sms_sent = true WHERE id = $1"


def map_notification(record: Record) -> Notification:
    """Converts a 'notifications' row to a Notification domain object."""
    return Notification(
        id=str(record["id"]),
        target_id=str(record["website_id"]),
        kind=NotificationKind(record["type"]),
        message=record["message"],
        email_sent=record["email_sent"],
        sms_sent=record["sms_sent"],
        created_at=record["created_at"],
    )


class PostgresNotificationStore(NotificationStore):
    """
    Stores notifications in the 'notifications' table.

    The kind of a notification is fixed at creation; only the two delivery
    flags are ever updated afterwards.
    """

    def __init__(self, pool: Pool) -> None:
        self._pool: Pool = pool

    async def create_notification(
        self, target_id: str, kind: NotificationKind, message: str
    ) -> Notification:
        async with self._pool.acquire() as conn:
            record = await conn.fetchrow(
                INSERT_NOTIFICATION_QUERY, target_id, NotificationKind(kind).value, message
            )
        return map_notification(record)

    async def mark_email_sent(self, notification_id: str) -> None:
        await self._set_flag(MARK_EMAIL_SENT_QUERY, notification_id)

    async def mark_sms_sent(self, notification_id: str) -> None:
        await self._set_flag(MARK_SMS_SENT_QUERY, notification_id)

    async def _set_flag(self, query: str, notification_id: str) -> None:
        async with self._pool.acquire() as conn:
            status = await conn.execute(query, notification_id)

        # asyncpg returns the command tag, e.g. "UPDATE 1"
        if status.endswith(" 0"):
            logger.warning(f"Notification {notification_id} not found while setting a flag.")
