"""
Configuration module for the uptime monitoring system.

This module provides functionality to parse command-line arguments and environment
variables to create a configuration context for the monitoring system. It defines
default values and help text for all configurable parameters.
"""

import argparse
import os
from typing import Any, List, Optional
from uuid import uuid4

from uptime_monitor.config.constants import (
    DEFAULT_DB_POOL_SIZE,
    DEFAULT_DSN,
    DEFAULT_FROM_EMAIL,
    DEFAULT_LOGGING_CONFIG_FILE,
    DEFAULT_LOGGING_TYPE,
    DEFAULT_NOTIFICATION_EMAIL,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_SWEEP_INTERVAL,
    DEFAULT_WORKER_ID_PREFIX,
    DEFAULT_WORKER_NUMBER,
)
from uptime_monitor.config.monitoring_context import MonitoringContext


def _getenv(name: str, fallback_name: str, default: str = "") -> str:
    """
    Reads a prefixed environment variable, falling back to its conventional name.

    Provider credentials are commonly exported under the provider's own
    variable names (e.g. SENDGRID_API_KEY), so those are honoured as well.
    """
    value = os.getenv(name)
    if value is None:
        value = os.getenv(fallback_name)
    return value if value is not None else default


def get_context(argv: Optional[List[str]] = None) -> MonitoringContext:
    """
    Parse command-line arguments and environment variables to create a configuration context.

    This function creates an argument parser with options for all configurable aspects
    of the monitoring system. For each option, it first checks for a command-line argument,
    then falls back to an environment variable, and finally uses a default value.

    Args:
        argv: Arguments to parse. Defaults to the process command line.

    Returns:
        MonitoringContext: A configuration context object containing all parsed settings.
    """
    parser = argparse.ArgumentParser(
        description="Periodically probes registered websites and alerts on up/down transitions."
    )

    parser.add_argument(
        "-dsn",
        type=str,
        default=os.getenv("UPTIME_MONITOR_DSN", DEFAULT_DSN),
        help="Specifies the DSN (connection string) for the PostgreSQL database.\n"
        "If not provided, the value is read from the UPTIME_MONITOR_DSN environment variable.\n"
        f"If that is also absent, a default value for a local database is used: {DEFAULT_DSN}",
    )

    parser.add_argument(
        "-wid",
        "--worker-id",
        type=str,
        default=os.getenv("UPTIME_MONITOR_WORKER_ID", f"{DEFAULT_WORKER_ID_PREFIX}{uuid4()}"),
        help="Specifies the identifier of this monitor instance, attached to every log record.\n"
        "If not provided, the value is read from the UPTIME_MONITOR_WORKER_ID environment variable.\n"
        f"If that is also absent, the default value will be {DEFAULT_WORKER_ID_PREFIX}uuid4().",
    )

    parser.add_argument(
        "-ps",
        "--db-pool-size",
        type=int,
        default=int(os.getenv("UPTIME_MONITOR_DB_POOL_SIZE", DEFAULT_DB_POOL_SIZE)),
        help="Specifies the maximum number of connections in the database connection pool.\n"
        "If not provided, the value is read from the UPTIME_MONITOR_DB_POOL_SIZE environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_DB_POOL_SIZE} is used.",
    )

    parser.add_argument(
        "-wn",
        "--worker-number",
        type=int,
        default=int(os.getenv("UPTIME_MONITOR_WORKER_NUMBER", DEFAULT_WORKER_NUMBER)),
        help="Specifies the maximum number of targets probed concurrently within a sweep.\n"
        "If not provided, the value is read from the UPTIME_MONITOR_WORKER_NUMBER environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_WORKER_NUMBER} is used.",
    )

    parser.add_argument(
        "-si",
        "--sweep-interval",
        type=int,
        default=int(os.getenv("UPTIME_MONITOR_SWEEP_INTERVAL", DEFAULT_SWEEP_INTERVAL)),
        help="Specifies the number of seconds between two periodic sweeps.\n"
        "If not provided, the value is read from the UPTIME_MONITOR_SWEEP_INTERVAL environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_SWEEP_INTERVAL} seconds is used.",
    )

    parser.add_argument(
        "-pt",
        "--probe-timeout",
        type=int,
        default=int(os.getenv("UPTIME_MONITOR_PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT)),
        help="Specifies the maximum duration in seconds of a single probe.\n"
        "If not provided, the value is read from the UPTIME_MONITOR_PROBE_TIMEOUT environment variable.\n"
        f"If that is also absent, a default value of {DEFAULT_PROBE_TIMEOUT} seconds is used.",
    )

    parser.add_argument(
        "-lt",
        "--logging-type",
        type=str,
        default=os.getenv("UPTIME_MONITOR_LOGGING_TYPE", DEFAULT_LOGGING_TYPE),
        help="Specifies the logging configuration type to use.\n"
        "Allowed values: dev, prod, custom (case insensitive).\n"
        "For 'dev' and 'prod', system will use built-in configurations.\n"
        "For 'custom', the --logging-config-file argument is required.",
    )

    parser.add_argument(
        "-lcf",
        "--logging-config-file",
        type=str,
        default=os.getenv("UPTIME_MONITOR_LOGGING_CONFIG_FILE", DEFAULT_LOGGING_CONFIG_FILE),
        help="Path to custom logging configuration file.\n"
        "Required when --logging-type is set to 'custom'.",
    )

    parser.add_argument(
        "--sendgrid-api-key",
        type=str,
        default=_getenv("UPTIME_MONITOR_SENDGRID_API_KEY", "SENDGRID_API_KEY"),
        help="API key of the SendGrid account used to send alert emails.\n"
        "If not provided, the value is read from UPTIME_MONITOR_SENDGRID_API_KEY or SENDGRID_API_KEY.\n"
        "Without a key, emails are not sent.",
    )

    parser.add_argument(
        "--twilio-account-sid",
        type=str,
        default=_getenv("UPTIME_MONITOR_TWILIO_ACCOUNT_SID", "TWILIO_ACCOUNT_SID"),
        help="Account SID of the Twilio account used to send alert SMS.\n"
        "If not provided, the value is read from UPTIME_MONITOR_TWILIO_ACCOUNT_SID or TWILIO_ACCOUNT_SID.",
    )

    parser.add_argument(
        "--twilio-auth-token",
        type=str,
        default=_getenv("UPTIME_MONITOR_TWILIO_AUTH_TOKEN", "TWILIO_AUTH_TOKEN"),
        help="Auth token of the Twilio account used to send alert SMS.\n"
        "If not provided, the value is read from UPTIME_MONITOR_TWILIO_AUTH_TOKEN or TWILIO_AUTH_TOKEN.",
    )

    parser.add_argument(
        "--twilio-from-number",
        type=str,
        default=_getenv("UPTIME_MONITOR_TWILIO_FROM_NUMBER", "TWILIO_PHONE_NUMBER"),
        help="Sender phone number of the Twilio account.\n"
        "If not provided, the value is read from UPTIME_MONITOR_TWILIO_FROM_NUMBER or TWILIO_PHONE_NUMBER.",
    )

    parser.add_argument(
        "--from-email",
        type=str,
        default=_getenv("UPTIME_MONITOR_FROM_EMAIL", "FROM_EMAIL", DEFAULT_FROM_EMAIL),
        help="Sender address of alert emails when none is stored in the settings.\n"
        f"If not provided, the value is read from UPTIME_MONITOR_FROM_EMAIL or FROM_EMAIL, "
        f"then defaults to {DEFAULT_FROM_EMAIL}.",
    )

    parser.add_argument(
        "--notification-email",
        type=str,
        default=_getenv(
            "UPTIME_MONITOR_NOTIFICATION_EMAIL", "NOTIFICATION_EMAIL", DEFAULT_NOTIFICATION_EMAIL
        ),
        help="Recipient address of alert emails when none is stored in the settings.\n"
        f"If not provided, the value is read from UPTIME_MONITOR_NOTIFICATION_EMAIL or "
        f"NOTIFICATION_EMAIL, then defaults to {DEFAULT_NOTIFICATION_EMAIL}.",
    )

    # Parse the command-line arguments
    args: Any = parser.parse_args(argv)

    # Create and return a MonitoringContext with the parsed settings
    return MonitoringContext(
        dsn=args.dsn,
        worker_id=args.worker_id,
        logging_type=args.logging_type,
        logging_config_file=args.logging_config_file,
        worker_number=args.worker_number,
        db_pool_size=args.db_pool_size,
        sweep_interval=args.sweep_interval,
        probe_timeout=args.probe_timeout,
        sendgrid_api_key=args.sendgrid_api_key,
        twilio_account_sid=args.twilio_account_sid,
        twilio_auth_token=args.twilio_auth_token,
        twilio_from_number=args.twilio_from_number,
        default_from_email=args.from_email,
        default_notification_email=args.notification_email,
    )
