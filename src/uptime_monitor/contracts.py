"""
Core interfaces for the uptime monitoring system.

This module defines the abstract base classes that form the foundation of the
monitoring system's architecture. The monitoring core only talks to its
collaborators (registry, stores, settings, delivery channels) through these
contracts, so each of them can be backed by a database, an HTTP API or an
in-memory fake.
"""

import abc
from typing import Iterable, List, Optional

from .domain import (
    MonitoredTarget,
    MonitoringResult,
    Notification,
    NotificationKind,
    NotificationSettings,
    ProbeOutcome,
)


class TargetRegistry(abc.ABC):
    """
    Abstract interface for the source of monitored targets.

    The scheduler calls it once per sweep, so targets added or removed
    between sweeps take effect on the next sweep.
    """

    @abc.abstractmethod
    async def list_targets(self) -> List[MonitoredTarget]:
        """
        Returns the current set of monitored targets.

        Returns:
            List[MonitoredTarget]: All targets that should be probed.

        Raises:
            Exception: If the registry cannot be read. This is the only failure
                that aborts a whole sweep.
        """
        pass


class TargetProber(abc.ABC):
    """
    Abstract interface for a component that performs the check for a single target.

    Its responsibility is to encapsulate the network I/O for a given target
    and return a classified outcome.
    """

    @abc.abstractmethod
    async def probe(self, target: MonitoredTarget) -> ProbeOutcome:
        """
        Performs one HTTP probe of the given target.

        Args:
            target: The target to check.

        Returns:
            ProbeOutcome: The classified outcome, including timing and error detail.

        Raises:
            Exception: Implementations must report network errors inside the
                ProbeOutcome rather than raising them.
        """
        pass


class ResultStore(abc.ABC):
    """
    Abstract interface for the store of monitoring results.
    """

    @abc.abstractmethod
    async def record_result(self, outcome: ProbeOutcome) -> MonitoringResult:
        """
        Persists a probe outcome as an immutable monitoring result.

        Args:
            outcome: The outcome to persist.

        Returns:
            MonitoringResult: The stored record with its assigned id and timestamp.

        Raises:
            Exception: If the outcome could not be stored. Outcomes must never
                be dropped silently.
        """
        pass


class NotificationStore(abc.ABC):
    """
    Abstract interface for the store of notifications and their delivery flags.
    """

    @abc.abstractmethod
    async def create_notification(
        self, target_id: str, kind: NotificationKind, message: str
    ) -> Notification:
        """
        Creates a notification with both delivery flags unset.

        Args:
            target_id: The identifier of the target that changed state.
            kind: The direction of the transition.
            message: Human-readable summary of the transition.

        Returns:
            Notification: The stored notification.
        """
        pass

    @abc.abstractmethod
    async def mark_email_sent(self, notification_id: str) -> None:
        """Sets the email-sent flag of a stored notification."""
        pass

    @abc.abstractmethod
    async def mark_sms_sent(self, notification_id: str) -> None:
        """Sets the sms-sent flag of a stored notification."""
        pass


class SettingsProvider(abc.ABC):
    """
    Abstract interface for the notification-channel configuration.
    """

    @abc.abstractmethod
    async def get_notification_settings(self) -> NotificationSettings:
        """
        Reads a fresh snapshot of the notification-channel settings.

        Returns:
            NotificationSettings: The current channel configuration.
        """
        pass


class MailChannel(abc.ABC):
    """
    Abstract interface for an email delivery channel.
    """

    @abc.abstractmethod
    async def send(
        self, to: str, from_address: str, subject: str, text: str, html: str
    ) -> bool:
        """
        Sends one email.

        Returns:
            bool: True only if the provider confirmed the message. Missing
                credentials or a provider error yield False, never an exception.
        """
        pass


class SmsChannel(abc.ABC):
    """
    Abstract interface for an SMS delivery channel.
    """

    @abc.abstractmethod
    async def send(self, to: str, body: str) -> bool:
        """
        Sends one text message.

        Returns:
            bool: True only if the provider confirmed the message. Missing
                credentials or a provider error yield False, never an exception.
        """
        pass


class StateStore(abc.ABC):
    """
    Abstract interface for the per-target store of last-known classifications.

    Implementations must make compare_and_set atomic per target id; updates
    to different target ids need no coordination.
    """

    @abc.abstractmethod
    async def compare_and_set(self, target_id: str, is_up: bool) -> Optional[bool]:
        """
        Stores a new classification for a target and returns the previous one.

        Args:
            target_id: The identifier of the target.
            is_up: The newly observed classification.

        Returns:
            Optional[bool]: The previously stored classification, or None if the
                target has never been observed.
        """
        pass

    @abc.abstractmethod
    async def revert(self, target_id: str, expected: bool, previous: bool) -> bool:
        """
        Restores a previous classification if the stored one is still 'expected'.

        Must be atomic with compare_and_set for the same target id, so that a
        newer observation written in the meantime is never overwritten.

        Returns:
            bool: True if the classification was restored.
        """
        pass

    @abc.abstractmethod
    async def retain(self, target_ids: Iterable[str]) -> None:
        """Forgets the stored classification of every target not listed."""
        pass
