"""
Main entry point for the uptime monitoring application.

This module initializes and runs the monitoring system. It sets up logging,
creates database and HTTP connections, wires the monitoring components together,
and handles graceful shutdown when the application is terminated.
"""

import asyncio
import logging

import aiohttp
import asyncpg

from uptime_monitor.config import MonitoringContext, get_context
from uptime_monitor.config.db_config import initiate_db_pool
from uptime_monitor.config.http_config import get_http_session
from uptime_monitor.config.logging_config import configure_logging
from uptime_monitor.notifier.dispatcher import NotifierDispatcher
from uptime_monitor.notifier.sendgrid_channel import SendGridMailChannel
from uptime_monitor.notifier.twilio_channel import TwilioSmsChannel
from uptime_monitor.prober.aiohttp_prober import AiohttpProber
from uptime_monitor.processor.result_recorder import ResultRecorder
from uptime_monitor.scheduler.periodic_scheduler import SweepScheduler
from uptime_monitor.state.memory_state_store import InMemoryStateStore
from uptime_monitor.state.state_tracker import StateTracker
from uptime_monitor.storage.asyncpg_notification_store import PostgresNotificationStore
from uptime_monitor.storage.asyncpg_registry import PostgresTargetRegistry
from uptime_monitor.storage.asyncpg_result_store import PostgresResultStore
from uptime_monitor.storage.asyncpg_settings_provider import PostgresSettingsProvider
from uptime_monitor.storage.schema import ensure_schema
from uptime_monitor.worker import MonitoringWorker


def build_scheduler(
    context: MonitoringContext,
    http_session: aiohttp.ClientSession,
    db_pool: asyncpg.pool.Pool,
) -> SweepScheduler:
    """
    Wires the monitoring components on top of the shared HTTP session and DB pool.

    Args:
        context: Configuration context containing all application settings.
        http_session: Session shared by the prober and the notification channels.
        db_pool: Pool shared by the registry and the stores.

    Returns:
        SweepScheduler: A stopped scheduler ready to be started.
    """
    worker_id: str = context.worker_id

    dispatcher = NotifierDispatcher(
        worker_id=worker_id,
        notification_store=PostgresNotificationStore(db_pool),
        settings_provider=PostgresSettingsProvider(
            db_pool,
            default_from_email=context.default_from_email,
            default_notification_email=context.default_notification_email,
        ),
        mail_channel=SendGridMailChannel(http_session, api_key=context.sendgrid_api_key),
        sms_channel=TwilioSmsChannel(
            http_session,
            account_sid=context.twilio_account_sid,
            auth_token=context.twilio_auth_token,
            from_number=context.twilio_from_number,
        ),
    )

    worker = MonitoringWorker(
        worker_id=worker_id,
        registry=PostgresTargetRegistry(db_pool),
        prober=AiohttpProber(
            worker_id=worker_id, session=http_session, timeout=context.probe_timeout
        ),
        recorder=ResultRecorder(worker_id=worker_id, store=PostgresResultStore(db_pool)),
        tracker=StateTracker(InMemoryStateStore()),
        dispatcher=dispatcher,
        num_workers=context.worker_number,
    )

    return SweepScheduler(worker=worker, interval=context.sweep_interval)


async def main(context: MonitoringContext) -> None:
    """
    Set up and run the uptime monitoring application until it is cancelled.

    Args:
        context: Configuration context containing all application settings.
    """
    logger: logging.Logger = logging.getLogger(__name__)
    logger.info("Starting application...")

    http_session: aiohttp.ClientSession = get_http_session(context)
    logger.info("configured: http_session")

    db_pool: asyncpg.pool.Pool = await initiate_db_pool(context)
    logger.info("initialized: db_pool")

    scheduler = None
    try:
        await ensure_schema(db_pool)
        scheduler = build_scheduler(context, http_session, db_pool)

        logger.info("Scheduler initialized. Starting monitoring loop...")
        await scheduler.start()
        await asyncio.Event().wait()

    except asyncio.CancelledError:
        logger.info("Application shutdown requested.")
    finally:
        # In-flight sweeps finish before their session and pool are closed
        logger.info("Shutting down resources...")
        if scheduler:
            await scheduler.stop()
            await scheduler.wait_for_sweeps()
        await http_session.close()
        await db_pool.close()
        logger.info("Shutdown complete.")


def run() -> None:
    """Console-script entry point."""
    try:
        # Parse command-line arguments and environment variables
        uptime_monitor_context: MonitoringContext = get_context()

        # Configure logging based on the context
        configure_logging(uptime_monitor_context)

        # Run the main application
        asyncio.run(main(uptime_monitor_context))
    except KeyboardInterrupt:
        logging.info("Shutdown initiated by user (Ctrl+C).")


if __name__ == "__main__":
    run()
