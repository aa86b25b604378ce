"""
Logging configuration module for the uptime monitoring system.

This module configures the standard logging system from a dictConfig JSON file:
one of the built-in 'dev' and 'prod' configurations shipped with the package,
or a custom file supplied by the operator.
"""

import json
import logging.config
import os
from typing import Any, Dict

from uptime_monitor.config import MonitoringContext

# Built-in logging configurations, keyed by logging type
BUILT_IN_CONFIGS: Dict[str, str] = {
    "dev": "logging-config-dev.json",
    "prod": "logging-config-prod.json",
}


def configure_logging(context: MonitoringContext) -> None:
    """
    Configure logging for the application based on the provided configuration.

    Once the configuration is loaded, a filter is attached to every handler of
    the root logger so that each record carries the 'worker_id' of this monitor
    instance, whichever module logger emitted it.

    Args:
        context: Configuration context containing logging settings.

    Raises:
        ValueError: If the logging type is invalid or if a custom logging
            configuration file is not provided when using the 'custom' type.
        RuntimeError: If the configuration file cannot be loaded.
    """
    _load_logging_config(_resolve_config_file(context))

    worker_id_filter = _WorkerIdFilter(worker_id=context.worker_id)
    for handler in logging.getLogger().handlers:
        handler.addFilter(worker_id_filter)

    logging.debug(f"Logging configured ({context.logging_type}) for {context.worker_id}.")


def _resolve_config_file(context: MonitoringContext) -> str:
    """
    Maps the configured logging type to the path of a dictConfig JSON file.
    """
    logging_type: str = context.logging_type.lower()
    if not logging_type:
        raise ValueError("Logging type must be provided.")

    if logging_type in BUILT_IN_CONFIGS:
        return _get_local_package_file_path(BUILT_IN_CONFIGS[logging_type])

    if logging_type == "custom":
        if not context.logging_config_file:
            raise ValueError("Custom logging configuration file must be provided.")
        return context.logging_config_file

    raise ValueError(
        f"Invalid logging type: {context.logging_type}. Allowed values are: dev, prod, custom"
    )


def _load_logging_config(config_file: str) -> None:
    """
    Load logging configuration from a JSON file and apply it with dictConfig.

    Args:
        config_file: Path to the JSON file containing logging configuration.

    Raises:
        RuntimeError: If the file is not found, contains invalid JSON, or
            is rejected by dictConfig.
    """
    try:
        with open(config_file) as f:
            config: Dict[str, Any] = json.load(f)
    except FileNotFoundError as err:
        raise RuntimeError(f"Logging config file not found: {config_file}") from err
    except json.JSONDecodeError as err:
        raise RuntimeError(f"Invalid JSON format in logging config file: {config_file}") from err

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as err:
        raise RuntimeError(f"Error loading logging config: {err}") from err


def _get_local_package_file_path(config_file: str) -> str:
    """Absolute path of a file shipped next to this module."""
    return os.path.join(os.path.dirname(__file__), config_file)


class _WorkerIdFilter(logging.Filter):
    """
    A logging filter that injects the worker ID into every log record.
    """

    def __init__(self, worker_id: str) -> None:
        super().__init__()
        self._worker_id: str = worker_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.worker_id = self._worker_id
        return True
