"""
Unit tests for the HTTP client configuration module.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

import aiohttp
import pytest

from uptime_monitor.config.http_config import USER_AGENT, get_http_session
from uptime_monitor.config.monitoring_context import MonitoringContext


@pytest.fixture
def mock_context() -> MonitoringContext:
    """Fixture that provides a MonitoringContext for testing."""
    return MonitoringContext(
        dsn="postgresql://localhost/test",
        worker_id="test-worker",
        logging_type="dev",
        logging_config_file="",
        worker_number=5,
        db_pool_size=10,
        sweep_interval=60,
        probe_timeout=30,
        sendgrid_api_key="",
        twilio_account_sid="",
        twilio_auth_token="",
        twilio_from_number="",
        default_from_email="from@example.com",
        default_notification_email="to@example.com",
    )


@pytest.mark.asyncio
async def test_get_http_session_should_size_connection_pool(mock_context: MonitoringContext) -> None:
    """
    Tests that every concurrent probe, plus the channels, can hold a connection.
    """
    # Act
    session = get_http_session(mock_context)

    # Assert
    try:
        assert isinstance(session, aiohttp.ClientSession)
        assert session.connector.limit == mock_context.worker_number + 5
        assert session.headers["User-Agent"] == USER_AGENT
    finally:
        await session.close()
