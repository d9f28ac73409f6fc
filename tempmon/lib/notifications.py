"""Notification system for CPU temperature alerts.

Emails are sent through the local ``mail`` executable, which is expected
to be backed by a working MTA (e.g. ``bsd-mailx`` with ``msmtp``).
"""

import asyncio
import stat
from abc import ABC, abstractmethod
from contextlib import suppress
from pathlib import Path
from typing import override

from tempmon.lib.config import Settings
from tempmon.lib.exceptions import (
    ConfigurationError,
    NotificationError,
    NotificationTimeoutError,
)
from tempmon.logging import get_logger

logger = get_logger("lib.notifications")

_EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def sanitize(value: str) -> str:
    """Strip semicolons before a value is passed as a command argument."""
    return value.replace(";", "")


def validate_mail_command(path: Path) -> None:
    """Check that the mail command exists and can be executed.

    Raises:
        ConfigurationError: If the path is missing, is a directory, or has
            no executable bit set.
    """
    try:
        mode = path.stat().st_mode
    except FileNotFoundError as e:
        raise ConfigurationError(f"'{path}' does not exist") from e
    except OSError as e:
        raise ConfigurationError(f"cannot access '{path}': {e}") from e

    if stat.S_ISDIR(mode):
        raise ConfigurationError(f"'mail' command points to a directory '{path}'")
    if not mode & _EXECUTABLE_BITS:
        raise ConfigurationError(f"'mail' command is not executable ({path})")


class AbstractNotifier(ABC):
    """Abstract base class for notification backends."""

    @abstractmethod
    async def send(self, subject: str, body: str) -> None:
        """Send a notification with the given subject and body."""


class MailNotifier(AbstractNotifier):
    """Sends notifications with the ``mail`` command.

    Runs ``<mail_command> -s <subject> <recipient>`` with the body on stdin.
    Nothing is sent when no recipient is configured.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def _spawn(self, subject: str, recipient: str) -> asyncio.subprocess.Process:
        logger.debug(
            "Running %s -s %r %s", self._settings.mail_command, subject, recipient
        )
        try:
            return await asyncio.create_subprocess_exec(
                str(self._settings.mail_command),
                "-s",
                subject,
                recipient,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise NotificationError(f"failed to send email: {e}") from e

    @override
    async def send(self, subject: str, body: str) -> None:
        """Send an email, waiting at most ``mail_timeout_sec`` for the command.

        Raises:
            NotificationTimeoutError: If the mail command timed out.
            NotificationError: If the mail command could not be started or
                exited with a non-zero status.
        """
        cfg = self._settings
        if not cfg.has_recipient:
            logger.info("Email recipient not set: no email will be sent")
            return

        logger.info("Attempting to send email to %s", cfg.recipient)
        proc = await self._spawn(sanitize(subject), sanitize(cfg.recipient))

        try:
            _, stderr = await asyncio.wait_for(
                proc.communicate(body.encode()),
                timeout=cfg.mail_timeout_sec,
            )
        except TimeoutError as e:
            logger.warning(
                "Mail command timed out after %gs", cfg.mail_timeout_sec
            )
            raise NotificationTimeoutError(
                f"failed to send email: mail command timed out after "
                f"{cfg.mail_timeout_sec:g}s"
            ) from e
        finally:
            # Reap the child on every exit path, including cancellation
            if proc.returncode is None:
                with suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        if proc.returncode != 0:
            message = (
                f"failed to send email: mail command exited with status "
                f"{proc.returncode}"
            )
            details = stderr.decode(errors="replace").strip()
            if details:
                message += f". Stderr: {details}"
            raise NotificationError(message)

        logger.info("Email sent successfully to %s", cfg.recipient)
