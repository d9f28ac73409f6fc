"""Settings model and configuration loading for the Raspi Temp Monitor."""

import re
import socket
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any

from pydantic import BeforeValidator, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tempmon.lib.config.constants import (
    CPU_TEMP_FILE_PATH,
    DEFAULT_INTERVAL,
    DEFAULT_THRESHOLD,
    MAIL_COMMAND,
    MAIL_TIMEOUT_SEC,
    NO_RECIPIENT,
    UNKNOWN_HOST,
)

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")

# Go-style durations, e.g. "300ms", "90s", "5m", "1h30m"
_DURATION_PATTERN = re.compile(r"(?:\d+(?:\.\d+)?(?:ns|us|µs|ms|s|m|h))+")
_DURATION_PART_PATTERN = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")

_DURATION_UNITS_SEC = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration string such as '5m' or '1h30m' into a timedelta.

    A bare number is read as seconds.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    text = value.strip()
    if _NUMBER_PATTERN.fullmatch(text):
        seconds = float(text)
    elif _DURATION_PATTERN.fullmatch(text):
        seconds = sum(
            float(amount) * _DURATION_UNITS_SEC[unit]
            for amount, unit in _DURATION_PART_PATTERN.findall(text)
        )
    else:
        raise ValueError(f"invalid duration '{value}'")
    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        raise ValueError(f"duration '{value}' is out of range") from e


def _parse_interval(v: Any) -> Any:
    """Parse interval from a duration string, leaving other types to pydantic."""
    if isinstance(v, str):
        return parse_duration(v)
    return v


def _parse_recipient(v: Any) -> Any:
    """Replace a missing or blank recipient with the sentinel value."""
    if v is None or (isinstance(v, str) and not v.strip()):
        return NO_RECIPIENT
    return v


def get_hostname() -> str:
    """Return the device hostname, or a placeholder if it cannot be resolved."""
    try:
        hostname = socket.gethostname()
    except OSError:
        return UNKNOWN_HOST
    return hostname or UNKNOWN_HOST


_Interval = Annotated[timedelta, BeforeValidator(_parse_interval)]
_Recipient = Annotated[str, BeforeValidator(_parse_recipient)]


class Settings(BaseSettings):
    """Application settings.

    Loaded once at startup from, in increasing priority: field defaults,
    ``TEMPMON_*`` environment variables (or a ``.env`` file), and keyword
    arguments (the command-line flags). Never mutated afterwards.
    """

    model_config = SettingsConfigDict(
        env_prefix="TEMPMON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    recipient: _Recipient = NO_RECIPIENT
    threshold: float = Field(default=DEFAULT_THRESHOLD, allow_inf_nan=False)
    interval: _Interval = DEFAULT_INTERVAL
    test_email: bool = False
    hostname: str = Field(default_factory=get_hostname)

    sensor_path: Path = CPU_TEMP_FILE_PATH
    mail_command: Path = MAIL_COMMAND
    mail_timeout_sec: float = Field(default=MAIL_TIMEOUT_SEC, gt=0)

    @field_validator("interval")
    @classmethod
    def _check_interval_positive(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("interval must be positive")
        return v

    @property
    def has_recipient(self) -> bool:
        """Whether an email recipient has been configured."""
        return self.recipient != NO_RECIPIENT
