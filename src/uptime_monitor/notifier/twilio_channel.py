"""
SMS delivery through the Twilio Messages HTTP API.

This module provides an implementation of the SmsChannel interface on top of
the shared aiohttp session.
"""

import logging

import aiohttp

from uptime_monitor.config.constants import DEFAULT_TWILIO_API_URL
from uptime_monitor.contracts import SmsChannel

# Module logger
logger = logging.getLogger(__name__)


class TwilioSmsChannel(SmsChannel):
    """
    An SmsChannel that creates messages through the Twilio REST API.

    The channel needs an account SID, an auth token and a sender number; if
    any of them is missing every send is reported as unsuccessful.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        account_sid: str,
        auth_token: str,
        from_number: str,
        api_url: str = DEFAULT_TWILIO_API_URL,
        timeout: int = 10,
    ) -> None:
        self._session: aiohttp.ClientSession = session
        self._account_sid: str = account_sid
        self._auth_token: str = auth_token
        self._from_number: str = from_number
        self._api_url: str = api_url.rstrip("/")
        self._timeout: int = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._account_sid and self._auth_token and self._from_number)

    @property
    def messages_url(self) -> str:
        return f"{self._api_url}/Accounts/{self._account_sid}/Messages.json"

    async def send(self, to: str, body: str) -> bool:
        """
        Sends one text message through Twilio.

        Args:
            to: Destination phone number in E.164 format.
            body: The message text.

        Returns:
            bool: True if Twilio created the message, False otherwise.
        """
        if not self.is_configured:
            logger.info("Twilio credentials or phone number not configured - SMS not sent")
            return False

        try:
            async with self._session.post(
                self.messages_url,
                data={"To": to, "From": self._from_number, "Body": body},
                auth=aiohttp.BasicAuth(self._account_sid, self._auth_token),
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as response:
                if 200 <= response.status < 300:
                    logger.info(f"SMS sent successfully to {to} ({response.status}).")
                    return True

                detail = await response.text()
                logger.error(f"Twilio rejected SMS ({response.status}): {detail}")
                return False
        except Exception as e:
            logger.error(f"Failed to send SMS: {e}")
            return False
