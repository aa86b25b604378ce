"""
HTTP client configuration module for the uptime monitoring system.

The same aiohttp session is shared by the prober and by the notification
channels that talk to HTTP APIs.
"""

import logging

import aiohttp

from uptime_monitor.config import MonitoringContext

# Module logger
logger = logging.getLogger(__name__)

USER_AGENT = "uptime-monitor/1.0"


def get_http_session(context: MonitoringContext) -> aiohttp.ClientSession:
    """
    Create an HTTP client session sized for the configured probe concurrency.

    Args:
        context: Configuration context containing HTTP client settings.

    Returns:
        aiohttp.ClientSession: A session whose connection pool allows every
            concurrent probe, plus the notification channels, to hold a connection.
    """
    connector = aiohttp.TCPConnector(limit=context.worker_number + 5)
    logger.debug(f"Creating HTTP session with connection limit {connector.limit}.")
    return aiohttp.ClientSession(connector=connector, headers={"User-Agent": USER_AGENT})
