"""
Unit tests for the AiohttpProber class.

This module contains tests for the AiohttpProber class, ensuring that it
classifies responses by status code, never raises for network failures and
reports the expected error descriptions and timings.

The tests follow the Arrange-Act-Assert (AAA) pattern and use proper mocking
of all external dependencies to ensure true unit testing.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
import pytest_asyncio

from uptime_monitor.domain import MonitoredTarget, ProbeOutcome
from uptime_monitor.prober.aiohttp_prober import AiohttpProber, classify_status


@pytest_asyncio.fixture
async def sample_target() -> MonitoredTarget:
    """
    Creates a sample MonitoredTarget for testing.

    Returns:
        A MonitoredTarget with test values.
    """
    return MonitoredTarget(
        id="site-1",
        name="Example",
        url="https://example.com",
        check_interval=5,
        notifications_enabled=True,
    )


@pytest_asyncio.fixture
async def mock_session() -> MagicMock:
    """
    Creates a mock aiohttp.ClientSession whose GET returns a 200 response.

    Returns:
        A mock ClientSession.
    """
    session = MagicMock(spec=aiohttp.ClientSession)

    response = MagicMock()
    response.status = 200
    response.reason = "OK"
    session.get.return_value.__aenter__ = AsyncMock(return_value=response)
    session.get.return_value.__aexit__ = AsyncMock(return_value=False)

    return session


@pytest_asyncio.fixture
async def prober(mock_session: MagicMock) -> AiohttpProber:
    """
    Creates an AiohttpProber with a mock session and the default timeout.
    """
    return AiohttpProber(worker_id="test-worker", session=mock_session)


def _set_status(session: MagicMock, status: int, reason: str) -> None:
    response = session.get.return_value.__aenter__.return_value
    response.status = status
    response.reason = reason


def test_classify_status_should_treat_4xx_as_up_and_5xx_as_down() -> None:
    """
    Tests the classification boundary between client and server errors.
    """
    # Act & Assert
    assert classify_status(200) is True
    assert classify_status(301) is True
    assert classify_status(404) is True
    assert classify_status(499) is True
    assert classify_status(500) is False
    assert classify_status(503) is False


def test_init_should_validate_timeout() -> None:
    """
    Tests that the constructor rejects non-positive timeouts.
    """
    # Arrange
    session = MagicMock(spec=aiohttp.ClientSession)

    # Act & Assert
    with pytest.raises(ValueError, match="timeout must be a positive number."):
        AiohttpProber(worker_id="test-worker", session=session, timeout=0)

    with pytest.raises(ValueError, match="timeout must be a positive number."):
        AiohttpProber(worker_id="test-worker", session=session, timeout=-1)


@pytest.mark.asyncio
async def test_probe_should_return_up_outcome_for_200(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that a 200 response produces an up outcome with its latency.
    """
    # Arrange
    mock_time = MagicMock()
    mock_time.time.side_effect = [1000.0, 1000.25]

    # Act
    with patch("uptime_monitor.prober.aiohttp_prober.time", mock_time):
        outcome = await prober.probe(sample_target)

    # Assert
    assert outcome == ProbeOutcome(
        target_id="site-1", is_up=True, status_code=200, response_time_ms=250, error=None
    )
    call_args = mock_session.get.call_args
    assert call_args[0][0] == sample_target.url
    assert call_args[1]["timeout"].total == 30


@pytest.mark.asyncio
async def test_probe_should_classify_499_as_up(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that a client error still means the target answered.
    """
    # Arrange
    _set_status(mock_session, 499, "Client Closed Request")

    # Act
    outcome = await prober.probe(sample_target)

    # Assert
    assert outcome.is_up is True
    assert outcome.status_code == 499
    assert outcome.error is None


@pytest.mark.asyncio
async def test_probe_should_classify_500_as_down_with_http_error(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that a server error is down and the error includes the status code.
    """
    # Arrange
    _set_status(mock_session, 500, "Internal Server Error")

    # Act
    outcome = await prober.probe(sample_target)

    # Assert
    assert outcome.is_up is False
    assert outcome.status_code == 500
    assert outcome.error == "HTTP 500: Internal Server Error"


@pytest.mark.asyncio
async def test_probe_should_report_timeout_as_down(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that a timeout is down with a non-empty error and a measured latency.
    """
    # Arrange
    mock_session.get.side_effect = asyncio.TimeoutError()

    # Act
    outcome = await prober.probe(sample_target)

    # Assert
    assert outcome.is_up is False
    assert outcome.status_code is None
    assert outcome.error == "Connection failed: request timed out after 30s"
    assert outcome.response_time_ms is not None
    assert outcome.response_time_ms >= 0


@pytest.mark.asyncio
async def test_probe_should_report_connection_refused_as_down(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that a connection-level failure is identified as such.
    """
    # Arrange
    connection_key = MagicMock(host="example.com", port=443, ssl=True)
    mock_session.get.side_effect = aiohttp.ClientConnectorError(
        connection_key, ConnectionRefusedError(111, "Connection refused")
    )

    # Act
    outcome = await prober.probe(sample_target)

    # Assert
    assert outcome.is_up is False
    assert outcome.status_code is None
    assert outcome.error.startswith("Connection failed: ")
    assert "example.com" in outcome.error


@pytest.mark.asyncio
async def test_probe_should_use_raw_text_for_unclassified_errors(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that any other exception is reported with its own message.
    """
    # Arrange
    mock_session.get.side_effect = ValueError("URL is invalid")

    # Act
    outcome = await prober.probe(sample_target)

    # Assert
    assert outcome.is_up is False
    assert outcome.error == "URL is invalid"


@pytest.mark.asyncio
async def test_probe_should_fall_back_to_exception_name_for_empty_message(
    prober: AiohttpProber, mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that a down outcome always carries a non-empty error.
    """
    # Arrange
    mock_session.get.side_effect = RuntimeError()

    # Act
    outcome = await prober.probe(sample_target)

    # Assert
    assert outcome.is_up is False
    assert outcome.error


@pytest.mark.asyncio
async def test_probe_should_use_configured_timeout(
    mock_session: MagicMock, sample_target: MonitoredTarget
) -> None:
    """
    Tests that the configured timeout is applied to the request.
    """
    # Arrange
    prober = AiohttpProber(worker_id="test-worker", session=mock_session, timeout=5)

    # Act
    await prober.probe(sample_target)

    # Assert
    assert mock_session.get.call_args[1]["timeout"].total == 5
