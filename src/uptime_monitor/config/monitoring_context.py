"""
Configuration context for the uptime monitoring system.

This module defines a data structure that holds all configuration parameters
for the monitoring system. It serves as a central point for passing configuration
throughout the application.
"""

from typing import NamedTuple


class MonitoringContext(NamedTuple):
    """
    A data structure containing all configuration parameters for the monitoring system.

    This class is immutable and provides a type-safe way to pass configuration
    throughout the application. It is created by parsing command-line arguments
    and environment variables.

    Attributes:
        dsn: Database connection string for PostgreSQL.
        worker_id: Unique identifier for this monitor instance.
        logging_type: Type of logging configuration to use (dev, prod, or custom).
        logging_config_file: Path to custom logging configuration file (if logging_type is 'custom').
        worker_number: Maximum number of targets probed concurrently within a sweep.
        db_pool_size: Maximum number of connections in the database connection pool.
        sweep_interval: Seconds between two periodic sweeps.
        probe_timeout: Upper bound in seconds on the duration of a single probe.
        sendgrid_api_key: API key of the SendGrid mail channel (empty if not configured).
        twilio_account_sid: Account SID of the Twilio SMS channel (empty if not configured).
        twilio_auth_token: Auth token of the Twilio SMS channel (empty if not configured).
        twilio_from_number: Sender phone number of the Twilio SMS channel.
        default_from_email: Sender address used when none is stored in the settings.
        default_notification_email: Recipient address used when none is stored in the settings.
    """

    dsn: str
    worker_id: str
    logging_type: str
    logging_config_file: str
    worker_number: int
    db_pool_size: int
    sweep_interval: int
    probe_timeout: int
    sendgrid_api_key: str
    twilio_account_sid: str
    twilio_auth_token: str
    twilio_from_number: str
    default_from_email: str
    default_notification_email: str
