"""Domain models for CPU temperature monitoring."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Self

from tempmon.lib.config import APP_NAME

# RFC 1123 timestamp, e.g. "Mon, 02 Jan 2006 15:04:05 CET"
_TIMESTAMP_FMT = "%a, %d %b %Y %H:%M:%S %Z"


class Decision(Enum):
    """Outcome of comparing a reading with the threshold."""

    NO_ACTION = auto()
    ALERT = auto()


def local_now() -> datetime:
    """Return the current local time as an aware datetime."""
    return datetime.now().astimezone()


def format_timestamp(dt: datetime) -> str:
    """Format a datetime for notification bodies."""
    return dt.strftime(_TIMESTAMP_FMT).strip()


@dataclass(frozen=True, slots=True)
class Notification:
    subject: str
    body: str

    @classmethod
    def alert(
        cls,
        hostname: str,
        temperature: float,
        threshold: float,
        timestamp: datetime,
    ) -> Self:
        """Build the notification sent when the threshold is exceeded."""
        return cls(
            subject=f"{APP_NAME}: CPU Temp Alert ({hostname}): {temperature:.2f}°C",
            body=(
                f"Warning: CPU temperature on {hostname} has exceeded threshold\n"
                f"Threshold temp: {threshold:.2f}°C\n"
                f"Current temp: {temperature:.2f}°C\n"
                f"Timestamp: {format_timestamp(timestamp)}"
            ),
        )

    @classmethod
    def test(cls, hostname: str, temperature: float, timestamp: datetime) -> Self:
        """Build the notification sent by the '-test-email' flag."""
        return cls(
            subject=f"{APP_NAME}: Test Alert ({hostname})",
            body=(
                "Warning: this is a test email\n"
                f"Hostname: {hostname}\n"
                f"Current CPU temperature: {temperature:.2f}°C\n"
                f"Timestamp: {format_timestamp(timestamp)}"
            ),
        )
