"""
Domain models for the uptime monitoring system.

This module defines the core data structures used throughout the application,
including monitored targets, probe outcomes, persisted monitoring results,
notifications and the typed notification-channel settings snapshot.
"""

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional


class NotificationKind(str, Enum):
    """
    The direction of a state transition that triggered a notification.

    Inheriting from 'str' allows enum members to be written to the database
    and compared with plain strings.
    """

    DOWN = "down"
    UP = "up"


class MonitoredTarget(NamedTuple):
    """
    Represents a single website under watch.

    This data structure corresponds to the columns of the 'websites' table.
    It is owned by the registry and read-only to the monitoring core.

    Attributes:
        id: The unique, opaque identifier of the target.
        name: Human-readable name used in alerts.
        url: The absolute URL to probe.
        check_interval: The configured check interval in minutes.
        notifications_enabled: Whether state transitions should raise notifications.
    """

    id: str
    name: str
    url: str
    check_interval: int
    notifications_enabled: bool


class ProbeOutcome(NamedTuple):
    """
    The result of a single HTTP probe.

    Attributes:
        target_id: The identifier of the probed target.
        is_up: The up/down classification of the probe.
        status_code: The HTTP status code received, or None if no response was obtained.
        response_time_ms: Elapsed time from request start to response or failure.
        error: Description of the failure, or None for a healthy response.
    """

    target_id: str
    is_up: bool
    status_code: Optional[int]
    response_time_ms: Optional[int]
    error: Optional[str]


class MonitoringResult(NamedTuple):
    """
    An immutable, persisted record of one ProbeOutcome.

    The identifier and timestamp are assigned by the result store.
    """

    id: str
    target_id: str
    is_up: bool
    status_code: Optional[int]
    response_time_ms: Optional[int]
    error: Optional[str]
    checked_at: datetime


class Notification(NamedTuple):
    """
    A persisted notification, created exactly once per detected transition.

    Attributes:
        id: Store-assigned identifier.
        target_id: The identifier of the target that changed state.
        kind: The direction of the transition.
        message: Human-readable summary, e.g. "Shop is down".
        email_sent: True once an email has been confirmed as sent.
        sms_sent: True once an SMS has been confirmed as sent.
        created_at: Store-assigned creation timestamp.
    """

    id: str
    target_id: str
    kind: NotificationKind
    message: str
    email_sent: bool
    sms_sent: bool
    created_at: datetime


class Transition(NamedTuple):
    """
    A detected flip of a target's up/down classification.

    Attributes:
        target_id: The identifier of the target that changed state.
        is_up: The new classification; it fully determines the direction.
    """

    target_id: str
    is_up: bool

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.UP if self.is_up else NotificationKind.DOWN


class NotificationSettings(NamedTuple):
    """
    A typed snapshot of the notification-channel configuration.

    A fresh snapshot is read for every transition so that settings changes
    take effect immediately.

    Attributes:
        email_enabled: Whether the email channel is globally enabled.
        email_from: Sender address for alert emails.
        email_to: Recipient address for alert emails.
        sms_enabled: Whether the SMS channel is globally enabled.
        sms_to: Destination phone number, or None if not configured.
        sms_critical_only: If set, recovery ('up') notices are not sent by SMS.
    """

    email_enabled: bool
    email_from: str
    email_to: str
    sms_enabled: bool
    sms_to: Optional[str]
    sms_critical_only: bool

    @classmethod
    def disabled(cls) -> "NotificationSettings":
        """
        Returns a snapshot with every channel turned off.

        Used when the configuration cannot be read.
        """
        return cls(
            email_enabled=False,
            email_from="",
            email_to="",
            sms_enabled=False,
            sms_to=None,
            sms_critical_only=False,
        )
