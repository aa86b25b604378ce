"""
Unit tests for the ResultRecorder class.

The tests follow the Arrange-Act-Assert (AAA) pattern.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from uptime_monitor.contracts import ResultStore
from uptime_monitor.domain import MonitoringResult, ProbeOutcome
from uptime_monitor.processor.result_recorder import ResultRecorder


@pytest_asyncio.fixture
async def mock_store() -> AsyncMock:
    """
    Creates a mock ResultStore that echoes outcomes back as results.
    """
    store = AsyncMock(spec=ResultStore)

    async def record_result(outcome: ProbeOutcome) -> MonitoringResult:
        return MonitoringResult(
            id="result-1",
            target_id=outcome.target_id,
            is_up=outcome.is_up,
            status_code=outcome.status_code,
            response_time_ms=outcome.response_time_ms,
            error=outcome.error,
            checked_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

    store.record_result.side_effect = record_result
    return store


@pytest.mark.asyncio
async def test_record_should_persist_outcome(mock_store: AsyncMock) -> None:
    """
    Tests that every field of the outcome reaches the store.
    """
    # Arrange
    recorder = ResultRecorder(worker_id="test-worker", store=mock_store)
    outcome = ProbeOutcome("site-1", False, None, 30000, "Connection failed: request timed out after 30s")

    # Act
    result = await recorder.record(outcome)

    # Assert
    mock_store.record_result.assert_awaited_once_with(outcome)
    assert result.id == "result-1"
    assert result.target_id == "site-1"
    assert result.is_up is False
    assert result.error == outcome.error


@pytest.mark.asyncio
async def test_record_should_propagate_store_errors(mock_store: AsyncMock) -> None:
    """
    Tests that a store failure is not swallowed.
    """
    # Arrange
    mock_store.record_result.side_effect = ConnectionError("database unavailable")
    recorder = ResultRecorder(worker_id="test-worker", store=mock_store)

    # Act & Assert
    with pytest.raises(ConnectionError, match="database unavailable"):
        await recorder.record(ProbeOutcome("site-1", True, 200, 12, None))
