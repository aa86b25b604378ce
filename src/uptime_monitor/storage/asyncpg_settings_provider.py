"""
PostgreSQL-based implementation of the SettingsProvider interface.

Notification-channel settings are kept as string key/value pairs in the
'settings' table; this module turns them into a typed NotificationSettings
snapshot.
"""

import logging
from typing import Dict, Optional

from asyncpg import Pool

from uptime_monitor.contracts import SettingsProvider
from uptime_monitor.domain import NotificationSettings

# Module logger
logger = logging.getLogger(__name__)

EMAIL_ENABLED_KEY = "email.enableNotifications"
EMAIL_FROM_KEY = "email.fromEmail"
EMAIL_TO_KEY = "email.notificationEmail"
SMS_ENABLED_KEY = "sms.enableNotifications"
SMS_PHONE_KEY = "sms.phoneNumber"
SMS_CRITICAL_ONLY_KEY = "sms.enableCriticalOnly"

SETTING_KEYS = (
    EMAIL_ENABLED_KEY,
    EMAIL_FROM_KEY,
    EMAIL_TO_KEY,
    SMS_ENABLED_KEY,
    SMS_PHONE_KEY,
    SMS_CRITICAL_ONLY_KEY,
)

SELECT_SETTINGS_QUERY = "SELECT key, value FROM settings WHERE key = ANY($1::text[])"


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


def parse_settings(
    values: Dict[str, str], default_from_email: str, default_notification_email: str
) -> NotificationSettings:
    """
    Builds a settings snapshot from raw key/value pairs.

    Email is enabled unless explicitly set to "false"; SMS and the
    critical-only restriction must be explicitly set to "true".

    Args:
        values: Raw settings keyed by name.
        default_from_email: Sender address used when none is stored.
        default_notification_email: Recipient address used when none is stored.

    Returns:
        NotificationSettings: The typed snapshot.
    """
    email_enabled_value = values.get(EMAIL_ENABLED_KEY)
    phone_number = (values.get(SMS_PHONE_KEY) or "").strip()

    return NotificationSettings(
        email_enabled=(email_enabled_value or "").strip().lower() != "false",
        email_from=values.get(EMAIL_FROM_KEY) or default_from_email,
        email_to=values.get(EMAIL_TO_KEY) or default_notification_email,
        sms_enabled=_is_true(values.get(SMS_ENABLED_KEY)),
        sms_to=phone_number or None,
        sms_critical_only=_is_true(values.get(SMS_CRITICAL_ONLY_KEY)),
    )


class PostgresSettingsProvider(SettingsProvider):
    """
    Reads the notification settings from the database on every call.
    """

    def __init__(
        self, pool: Pool, default_from_email: str, default_notification_email: str
    ) -> None:
        self._pool: Pool = pool
        self._default_from_email: str = default_from_email
        self._default_notification_email: str = default_notification_email

    async def get_notification_settings(self) -> NotificationSettings:
        async with self._pool.acquire() as conn:
            records = await conn.fetch(SELECT_SETTINGS_QUERY, list(SETTING_KEYS))

        values = {record["key"]: record["value"] for record in records}
        return parse_settings(
            values, self._default_from_email, self._default_notification_email
        )
