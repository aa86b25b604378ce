"""
Unit tests for the SendGridMailChannel class.

The tests follow the Arrange-Act-Assert (AAA) pattern and mock the aiohttp
session, so no request leaves the process.
"""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
import pytest_asyncio

from uptime_monitor.config.constants import DEFAULT_SENDGRID_API_URL
from uptime_monitor.notifier.sendgrid_channel import SendGridMailChannel


@pytest_asyncio.fixture
async def mock_session() -> MagicMock:
    """
    Creates a mock aiohttp.ClientSession whose POST returns 202 Accepted.
    """
    session = MagicMock(spec=aiohttp.ClientSession)

    response = MagicMock()
    response.status = 202
    response.text = AsyncMock(return_value="")
    session.post.return_value.__aenter__ = AsyncMock(return_value=response)
    session.post.return_value.__aexit__ = AsyncMock(return_value=False)

    return session


async def _send(channel: SendGridMailChannel) -> bool:
    return await channel.send(
        to="ops@example.com",
        from_address="alerts@example.com",
        subject="Shop is Down",
        text="plain",
        html="<p>html</p>",
    )


@pytest.mark.asyncio
async def test_send_should_post_mail_payload(mock_session: MagicMock) -> None:
    """
    Tests the request sent to SendGrid.
    """
    # Arrange
    channel = SendGridMailChannel(mock_session, api_key="SG.key")

    # Act
    sent = await _send(channel)

    # Assert
    assert sent is True
    args, kwargs = mock_session.post.call_args
    assert args[0] == DEFAULT_SENDGRID_API_URL
    assert kwargs["headers"] == {"Authorization": "Bearer SG.key"}
    assert kwargs["json"] == {
        "personalizations": [{"to": [{"email": "ops@example.com"}]}],
        "from": {"email": "alerts@example.com"},
        "subject": "Shop is Down",
        "content": [
            {"type": "text/plain", "value": "plain"},
            {"type": "text/html", "value": "<p>html</p>"},
        ],
    }
    assert kwargs["timeout"].total == 10


@pytest.mark.asyncio
async def test_send_should_not_call_api_without_key(mock_session: MagicMock) -> None:
    """
    Tests that an unconfigured channel reports an unsuccessful send.
    """
    # Arrange
    channel = SendGridMailChannel(mock_session, api_key="")

    # Act
    sent = await _send(channel)

    # Assert
    assert channel.is_configured is False
    assert sent is False
    mock_session.post.assert_not_called()


@pytest.mark.asyncio
async def test_send_should_report_rejected_messages(mock_session: MagicMock) -> None:
    """
    Tests that a non-2xx answer is an unsuccessful send.
    """
    # Arrange
    response = mock_session.post.return_value.__aenter__.return_value
    response.status = 401
    response.text.return_value = '{"errors": [{"message": "unauthorized"}]}'
    channel = SendGridMailChannel(mock_session, api_key="SG.bad")

    # Act
    sent = await _send(channel)

    # Assert
    assert sent is False
    response.text.assert_awaited_once()


@pytest.mark.asyncio
async def test_send_should_not_raise_on_network_errors(mock_session: MagicMock) -> None:
    """
    Tests that transport failures are reported as an unsuccessful send.
    """
    # Arrange
    mock_session.post.side_effect = aiohttp.ClientError("connection reset")
    channel = SendGridMailChannel(mock_session, api_key="SG.key")

    # Act
    sent = await _send(channel)

    # Assert
    assert sent is False
