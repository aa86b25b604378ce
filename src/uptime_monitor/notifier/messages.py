"""
Message rendering for notifications.

Each transition produces a short summary stored with the notification, plus a
channel-specific rendering: an email (subject, plain text and HTML bodies) and
a single-line SMS body.
"""

import html
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from uptime_monitor.domain import MonitoredTarget, NotificationKind


class EmailContent(NamedTuple):
    subject: str
    text: str
    html: str


def _format_time(now: Optional[datetime]) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def notification_message(target: MonitoredTarget, kind: NotificationKind) -> str:
    """
    Renders the summary stored with a notification.

    Args:
        target: The target that changed state.
        kind: The direction of the transition.

    Returns:
        str: "{name} is down" or "{name} is back online".
    """
    if kind == NotificationKind.DOWN:
        return f"{target.name} is down"
    return f"{target.name} is back online"


def downtime_email(
    target: MonitoredTarget, error: Optional[str] = None, now: Optional[datetime] = None
) -> EmailContent:
    """
    Renders the email sent when a target goes down.

    Args:
        target: The target that went down.
        error: The error description of the failing probe, if any.
        now: The time to report. Defaults to the current UTC time.

    Returns:
        EmailContent: Subject, plain-text and HTML bodies.
    """
    timestamp = _format_time(now)
    subject = f"\U0001F534 {target.name} is Down"

    detail = f"Error: {error}" if error else "Please check your website immediately."
    text = (
        f"Your website {target.name} ({target.url}) is currently down.\n\n"
        f"{detail}\n\n"
        f"Time: {timestamp}"
    )

    name = html.escape(target.name)
    url = html.escape(target.url)
    error_line = f"<p><strong>Error:</strong> {html.escape(error)}</p>" if error else ""
    body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <div style="background-color: #fee2e2; border: 1px solid #fecaca; border-radius: 8px; padding: 16px; margin-bottom: 16px;">
        <h2 style="color: #dc2626; margin: 0;">\U0001F534 Website Down Alert</h2>
      </div>
      <p>Your website <strong>{name}</strong> is currently down.</p>
      <p><strong>URL:</strong> {url}</p>
      {error_line}
      <p><strong>Time:</strong> {timestamp}</p>
      <p>Please check your website immediately.</p>
    </div>
    """

    return EmailContent(subject=subject, text=text, html=body)


def uptime_restored_email(target: MonitoredTarget, now: Optional[datetime] = None) -> EmailContent:
    """
    Renders the email sent when a target is reachable again.

    Args:
        target: The target that recovered.
        now: The time to report. Defaults to the current UTC time.

    Returns:
        EmailContent: Subject, plain-text and HTML bodies.
    """
    timestamp = _format_time(now)
    subject = f"\u2705 {target.name} is Back Online"
    text = (
        f"Good news! Your website {target.name} ({target.url}) is back online.\n\n"
        f"Time: {timestamp}"
    )

    name = html.escape(target.name)
    url = html.escape(target.url)
    body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <div style="background-color: #dcfce7; border: 1px solid #bbf7d0; border-radius: 8px; padding: 16px; margin-bottom: 16px;">
        <h2 style="color: #16a34a; margin: 0;">\u2705 Website Restored</h2>
      </div>
      <p>Good news! Your website <strong>{name}</strong> is back online.</p>
      <p><strong>URL:</strong> {url}</p>
      <p><strong>Time:</strong> {timestamp}</p>
    </div>
    """

    return EmailContent(subject=subject, text=text, html=body)


def sms_body(target: MonitoredTarget, kind: NotificationKind, error: Optional[str] = None) -> str:
    """
    Renders the single-line SMS body of a transition.
    """
    if kind == NotificationKind.DOWN:
        suffix = f" Error: {error}" if error else ""
        return f"ALERT: {target.name} ({target.url}) is DOWN.{suffix}"
    return f"RESOLVED: {target.name} ({target.url}) is back online."
