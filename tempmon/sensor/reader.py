"""Read the CPU temperature from the kernel thermal zone.

The thermal zone file holds a single integer in milli-degrees Celsius, e.g.
``48312`` for 48.312°C. The file is re-read on every call.
"""

import re
from pathlib import Path

from tempmon.lib.config import CPU_TEMP_FILE_PATH
from tempmon.lib.exceptions import SensorParseError, SensorReadError

# Plain decimal integer; int() alone would also take "+1" and "1_000"
_MILLIDEGREES_PATTERN = re.compile(rb"-?[0-9]+")


def read_temperature(path: Path | str = CPU_TEMP_FILE_PATH) -> float:
    """Return the current CPU temperature in Celsius.

    Raises:
        SensorReadError: If the file cannot be read.
        SensorParseError: If the file content is not an integer.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise SensorReadError(
            f"failed to read temperature file {path}: {e}"
        ) from e

    raw = data.strip()
    if not _MILLIDEGREES_PATTERN.fullmatch(raw):
        raise SensorParseError(
            f"failed to parse temperature value '{raw.decode(errors='replace')}'"
        )

    return int(raw) / 1000.0
