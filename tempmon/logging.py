"""Logging configuration for the Raspi Temp Monitor application.

All application loggers live under the ``tempmon`` namespace and share a
single stderr handler. The ``-verbose`` flag lowers the level to DEBUG,
which adds the mail command line and in-threshold readings to the output.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"

_handler: logging.Handler | None = None


def configure(level: int = logging.INFO) -> None:
    """Configure logging for the application.

    The stderr handler is installed once; later calls only change the level.
    """
    global _handler
    root = logging.getLogger("tempmon")
    root.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the 'tempmon' namespace."""
    return logging.getLogger(f"tempmon.{name}")
