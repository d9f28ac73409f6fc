"""Command-line entry point for the CPU temperature monitor.

Usage: tempmon [-recipient ADDRESS] [-threshold CELSIUS] [-interval DURATION]
               [-test-email] [-verbose]
"""

import argparse
import asyncio
import logging
import math
from collections.abc import Sequence
from datetime import timedelta

from pydantic import ValidationError

from tempmon.lib.config import (
    APP_NAME,
    APP_PREFIX,
    APP_VERSION,
    DEFAULT_THRESHOLD,
    Settings,
    parse_duration,
)
from tempmon.lib.exceptions import ConfigurationError, TempMonitorError
from tempmon.lib.notifications import validate_mail_command
from tempmon.logging import configure, get_logger
from tempmon.monitor.polling import CPUTempPollingService, send_test_email

logger = get_logger("monitor.cli")


def _interval(value: str) -> timedelta:
    """Parse and validate the '-interval' flag."""
    try:
        interval = parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    if interval <= timedelta(0):
        raise argparse.ArgumentTypeError("interval must be positive")
    return interval


def _threshold(value: str) -> float:
    """Parse and validate the '-threshold' flag."""
    try:
        threshold = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid threshold '{value}'") from e
    if not math.isfinite(threshold):
        raise argparse.ArgumentTypeError("threshold must be a finite number")
    return threshold


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tempmon",
        description="Monitor the CPU temperature and send email alerts",
    )
    # Unset flags stay None so TEMPMON_* environment variables apply
    parser.add_argument(
        "-recipient",
        help="Recipient email address for alert notifications",
    )
    parser.add_argument(
        "-threshold",
        type=_threshold,
        help=f"CPU temperature (Celsius) threshold (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "-interval",
        type=_interval,
        help="Interval for checking CPU temperature, e.g. 30s, 5m, 1h (default: 5m)",
    )
    parser.add_argument(
        "-test-email",
        action="store_true",
        default=None,
        help="Send a test email and exit",
    )
    parser.add_argument(
        "-verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    parser.add_argument(
        "-version", action="version", version=f"{APP_NAME} {APP_VERSION}"
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, overridden by explicit flags."""
    overrides = {
        k: v
        for k, v in vars(args).items()
        if v is not None and k != "verbose"
    }
    return Settings(**overrides)


def show_configuration(settings: Settings) -> None:
    """Log the effective configuration."""
    logger.info("|")
    logger.info("| Application version: %s", APP_VERSION)
    logger.info(
        "| Temperature threshold ('-threshold'): %.2f°C", settings.threshold
    )
    logger.info("| Check interval ('-interval'): %s", settings.interval)
    logger.info("| Email recipient ('-recipient'): %s", settings.recipient)
    logger.info("| Mail command: %s", settings.mail_command)
    logger.info("| Device hostname: %s", settings.hostname)
    logger.info("|")


def hello() -> None:
    logger.info("%s Starting %s %s", APP_PREFIX, APP_NAME, APP_VERSION)


def goodbye() -> int:
    logger.info("%s Exiting %s %s", APP_PREFIX, APP_NAME, APP_VERSION)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the temperature monitor."""
    args = build_parser().parse_args(argv)
    configure(logging.DEBUG if args.verbose else logging.INFO)
    hello()

    try:
        settings = load_settings(args)
        validate_mail_command(settings.mail_command)
    except (ValidationError, ConfigurationError) as e:
        logger.error("Error: %s", e)
        return goodbye()

    logger.info("%s Configuration", APP_PREFIX)
    show_configuration(settings)

    if settings.test_email:
        try:
            asyncio.run(send_test_email(settings))
        except TempMonitorError as e:
            logger.error("Error sending test email: %s", e)
        return goodbye()

    logger.info("%s Monitoring", APP_PREFIX)
    CPUTempPollingService(settings).run()
    return goodbye()
