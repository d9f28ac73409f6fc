"""Application constants and configuration defaults."""

from datetime import timedelta
from pathlib import Path

APP_PREFIX = "-----"
APP_NAME = "Raspi-Temp-Monitor"
APP_VERSION = "0.1.0"

# Sentinel used in place of an empty recipient address
NO_RECIPIENT = "<none>"
UNKNOWN_HOST = "<unknown-host>"

# Kernel thermal zone, reports milli-degrees Celsius
CPU_TEMP_FILE_PATH = Path("/sys/class/thermal/thermal_zone0/temp")
MAIL_COMMAND = Path("/usr/bin/mail")
MAIL_TIMEOUT_SEC = 15.0

DEFAULT_THRESHOLD = 60.0  # Celsius
DEFAULT_INTERVAL = timedelta(minutes=5)
