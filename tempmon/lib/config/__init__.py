"""Centralized configuration for the Raspi Temp Monitor application.

This package provides:
- Application constants and defaults
- The pydantic settings model and duration parsing
"""

from .constants import (
    APP_NAME,
    APP_PREFIX,
    APP_VERSION,
    CPU_TEMP_FILE_PATH,
    DEFAULT_INTERVAL,
    DEFAULT_THRESHOLD,
    MAIL_COMMAND,
    MAIL_TIMEOUT_SEC,
    NO_RECIPIENT,
    UNKNOWN_HOST,
)
from .settings import Settings, get_hostname, parse_duration

__all__ = [
    # Constants
    "APP_NAME",
    "APP_PREFIX",
    "APP_VERSION",
    "CPU_TEMP_FILE_PATH",
    "DEFAULT_INTERVAL",
    "DEFAULT_THRESHOLD",
    "MAIL_COMMAND",
    "MAIL_TIMEOUT_SEC",
    "NO_RECIPIENT",
    "UNKNOWN_HOST",
    # Settings models
    "Settings",
    # Functions
    "get_hostname",
    "parse_duration",
]
