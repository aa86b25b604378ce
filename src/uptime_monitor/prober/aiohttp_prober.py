"""
HTTP prober implementation using the aiohttp library.

This module provides an implementation of the TargetProber interface that uses
the aiohttp library to perform a single bounded-time GET request. It handles
timing, classification and the error taxonomy reported for down targets.
"""

import asyncio
import logging
import time
from typing import Optional

import aiohttp

from uptime_monitor.config.constants import DEFAULT_PROBE_TIMEOUT
from uptime_monitor.contracts import TargetProber
from uptime_monitor.domain import MonitoredTarget, ProbeOutcome

# Module logger
logger = logging.getLogger(__name__)

# Any response below this status means the target answered.
SERVER_ERROR_THRESHOLD = 500


def classify_status(status_code: int) -> bool:
    """
    Classifies an HTTP status code as up or down.

    Client errors (4xx) count as up: the target answered, which is what
    matters for reachability monitoring.

    Args:
        status_code: The HTTP status code of the response.

    Returns:
        bool: True if the target is considered up, False otherwise.
    """
    return status_code < SERVER_ERROR_THRESHOLD


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


class AiohttpProber(TargetProber):
    """
    A concrete implementation of TargetProber using the aiohttp library.

    This class handles the entire lifecycle of a single probe. It never raises
    for network-level failures: a failed probe is the signal being monitored
    and is returned as a down ProbeOutcome. There are no retries inside a probe.
    """

    def __init__(
        self,
        worker_id: str,
        session: aiohttp.ClientSession,
        timeout: int = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        """
        Initializes the prober with a shared aiohttp ClientSession.

        Args:
            worker_id: A unique identifier for this worker instance.
            session: An active aiohttp.ClientSession to be used for requests.
            timeout: Upper bound in seconds on the total duration of one probe.

        Raises:
            ValueError: If the timeout is not a positive number.
        """
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError("timeout must be a positive number.")

        self._worker_id: str = worker_id
        self._session: aiohttp.ClientSession = session
        self._timeout: int = timeout

    async def probe(self, target: MonitoredTarget) -> ProbeOutcome:
        """
        Performs a GET request to the target's URL and classifies the result.

        Args:
            target: The target to check.

        Returns:
            ProbeOutcome: The classified outcome with elapsed time and, for
                down targets, a description of the failure.
        """
        logger.debug(f"Starting probe for target: {target.url}")
        status_code: Optional[int] = None
        error: Optional[str] = None
        start_time: float = time.time()

        try:
            async with self._session.get(
                target.url,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as response:
                status_code = response.status
                if not classify_status(status_code):
                    error = f"HTTP {status_code}: {response.reason}"

        except asyncio.TimeoutError:
            error = f"Connection failed: request timed out after {self._timeout}s"
        except aiohttp.ClientConnectorError as e:
            # DNS resolution failures and refused connections
            error = f"Connection failed: {e}"
        except Exception as e:
            error = str(e) or type(e).__name__

        response_time_ms = _elapsed_ms(start_time)

        if status_code is not None:
            is_up = classify_status(status_code)
        else:
            is_up = False

        if error is None:
            logger.debug(
                f"Probed {target.url} in {response_time_ms}ms with status {status_code}"
            )
        else:
            logger.info(f"Target {target.id} ({target.url}) is down: {error}")

        return ProbeOutcome(
            target_id=target.id,
            is_up=is_up,
            status_code=status_code,
            response_time_ms=response_time_ms,
            error=error,
        )
