"""
Email delivery through the SendGrid v3 HTTP API.

This module provides an implementation of the MailChannel interface on top of
the shared aiohttp session. Missing credentials and provider errors are
reported as an unsuccessful send, never as an exception.
"""

import logging
from typing import Any, Dict

import aiohttp

from uptime_monitor.config.constants import DEFAULT_SENDGRID_API_URL
from uptime_monitor.contracts import MailChannel

# Module logger
logger = logging.getLogger(__name__)


class SendGridMailChannel(MailChannel):
    """
    A MailChannel that posts messages to the SendGrid mail/send endpoint.

    SendGrid answers 202 Accepted when it takes a message; any 2xx status is
    treated as a confirmed send.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        api_url: str = DEFAULT_SENDGRID_API_URL,
        timeout: int = 10,
    ) -> None:
        """
        Initializes the channel.

        Args:
            session: An active aiohttp.ClientSession to be used for requests.
            api_key: The SendGrid API key. An empty key disables sending.
            api_url: The mail/send endpoint.
            timeout: Upper bound in seconds on one API call.
        """
        self._session: aiohttp.ClientSession = session
        self._api_key: str = api_key
        self._api_url: str = api_url
        self._timeout: int = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @staticmethod
    def _build_payload(
        to: str, from_address: str, subject: str, text: str, html: str
    ) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": from_address},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text or ""},
                {"type": "text/html", "value": html or ""},
            ],
        }

    async def send(
        self, to: str, from_address: str, subject: str, text: str, html: str
    ) -> bool:
        """
        Sends one email through SendGrid.

        Returns:
            bool: True if SendGrid accepted the message, False otherwise.
        """
        if not self.is_configured:
            logger.warning("SendGrid API key not configured - email not sent")
            return False

        try:
            async with self._session.post(
                self._api_url,
                json=self._build_payload(to, from_address, subject, text, html),
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as response:
                if 200 <= response.status < 300:
                    logger.info(f"Email '{subject}' sent to {to}.")
                    return True

                detail = await response.text()
                logger.error(f"SendGrid rejected email '{subject}' ({response.status}): {detail}")
                return False
        except Exception as e:
            logger.error(f"SendGrid email error: {e}")
            return False
