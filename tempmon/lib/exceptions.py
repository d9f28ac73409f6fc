"""Custom exceptions for the Raspi Temp Monitor application.

Startup errors (``ConfigurationError`` and its subclasses) abort the process.
Sensor and notification errors only fail the current evaluation cycle.
"""


class TempMonitorError(Exception):
    """Base exception for all application errors."""


class ConfigurationError(TempMonitorError):
    """Raised when the runtime configuration cannot be used."""


class MissingRecipientError(ConfigurationError):
    """Raised when a test email is requested without a recipient."""

    def __init__(
        self,
        message: str = "'-test-email' flag requires '-recipient' flag to be set",
    ) -> None:
        super().__init__(message)


class SensorError(TempMonitorError):
    """Base exception for temperature sensor errors."""


class SensorReadError(SensorError):
    """Raised when the sensor file cannot be read."""


class SensorParseError(SensorError):
    """Raised when the sensor file does not hold an integer."""


class NotificationError(TempMonitorError):
    """Raised when the mail command fails to send a notification."""


class NotificationTimeoutError(NotificationError):
    """Raised when the mail command does not finish before its deadline."""
