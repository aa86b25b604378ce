"""
Notification dispatching for the uptime monitoring system.

On a detected transition, the dispatcher stores a Notification and then tries
every enabled delivery channel. Channel attempts run concurrently and are
isolated from each other: a failing or disabled channel never blocks or
affects another one, and delivery failures never reach the caller.
"""

import asyncio
import logging
from typing import Optional

from uptime_monitor.contracts import (
    MailChannel,
    NotificationStore,
    SettingsProvider,
    SmsChannel,
)
from uptime_monitor.domain import (
    MonitoredTarget,
    Notification,
    NotificationKind,
    NotificationSettings,
    Transition,
)
from uptime_monitor.notifier.messages import (
    downtime_email,
    notification_message,
    sms_body,
    uptime_restored_email,
)

# Module logger
logger = logging.getLogger(__name__)


class NotifierDispatcher:
    """
    Creates notifications for transitions and delivers them by email and SMS.

    Deliveries are attempted once. A flag on the stored notification is set
    only after its channel confirmed the send.
    """

    def __init__(
        self,
        worker_id: str,
        notification_store: NotificationStore,
        settings_provider: SettingsProvider,
        mail_channel: MailChannel,
        sms_channel: SmsChannel,
    ) -> None:
        """
        Initializes the dispatcher.

        Args:
            worker_id: A unique identifier for this worker instance.
            notification_store: Store for notifications and their delivery flags.
            settings_provider: Source of the notification-channel settings.
            mail_channel: Channel used to send alert emails.
            sms_channel: Channel used to send alert text messages.
        """
        self._worker_id: str = worker_id
        self._notification_store: NotificationStore = notification_store
        self._settings_provider: SettingsProvider = settings_provider
        self._mail_channel: MailChannel = mail_channel
        self._sms_channel: SmsChannel = sms_channel

    async def _read_settings(self) -> NotificationSettings:
        try:
            return await self._settings_provider.get_notification_settings()
        except Exception as e:
            logger.error(f"Could not read notification settings, all channels disabled: {e}")
            return NotificationSettings.disabled()

    async def dispatch(
        self,
        target: MonitoredTarget,
        transition: Transition,
        error: Optional[str] = None,
    ) -> Optional[Notification]:
        """
        Handles one transition of one target.

        Args:
            target: The target that changed state.
            transition: The detected transition.
            error: The error description of the probe that triggered a 'down'
                transition, if any.

        Returns:
            Optional[Notification]: The notification with its final delivery
                flags, or None if the target has notifications disabled.

        Raises:
            Exception: If the notification itself cannot be stored.
        """
        if not target.notifications_enabled:
            logger.debug(f"Notifications disabled for target {target.id}, skipping.")
            return None

        kind = transition.kind
        notification = await self._notification_store.create_notification(
            target.id, kind, notification_message(target, kind)
        )
        logger.info(f"Created '{kind.value}' notification {notification.id} for {target.name}.")

        settings = await self._read_settings()

        email_sent, sms_sent = await asyncio.gather(
            self._deliver_email(notification, target, settings, error),
            self._deliver_sms(notification, target, settings, error),
        )

        return notification._replace(email_sent=email_sent, sms_sent=sms_sent)

    async def _deliver_email(
        self,
        notification: Notification,
        target: MonitoredTarget,
        settings: NotificationSettings,
        error: Optional[str],
    ) -> bool:
        """
        Sends the email for a notification and flags it as sent on success.

        Returns:
            bool: True if the email was sent and the flag stored.
        """
        if not settings.email_enabled:
            return False

        if notification.kind == NotificationKind.DOWN:
            content = downtime_email(target, error)
        else:
            content = uptime_restored_email(target)

        try:
            sent = await self._mail_channel.send(
                to=settings.email_to,
                from_address=settings.email_from,
                subject=content.subject,
                text=content.text,
                html=content.html,
            )
            if not sent:
                logger.warning(f"Email for notification {notification.id} was not sent.")
                return False

            await self._notification_store.mark_email_sent(notification.id)
            return True
        except Exception:
            logger.exception(f"Email delivery failed for notification {notification.id}")
            return False

    async def _deliver_sms(
        self,
        notification: Notification,
        target: MonitoredTarget,
        settings: NotificationSettings,
        error: Optional[str],
    ) -> bool:
        """
        Sends the SMS for a notification and flags it as sent on success.

        Recovery notices are not critical: they are skipped when the SMS channel
        is restricted to critical alerts.

        Returns:
            bool: True if the SMS was sent and the flag stored.
        """
        if not settings.sms_enabled or not settings.sms_to:
            return False

        if notification.kind == NotificationKind.UP and settings.sms_critical_only:
            logger.debug(f"SMS for notification {notification.id} suppressed (critical only).")
            return False

        try:
            sent = await self._sms_channel.send(
                to=settings.sms_to,
                body=sms_body(target, notification.kind, error),
            )
            if not sent:
                logger.warning(f"SMS for notification {notification.id} was not sent.")
                return False

            await self._notification_store.mark_sms_sent(notification.id)
            return True
        except Exception:
            logger.exception(f"SMS delivery failed for notification {notification.id}")
            return False
