"""Poll the CPU temperature and email an alert when it runs too hot.

One cycle runs immediately on startup, then one per configured interval.
Sensor and mail failures are logged and the loop carries on with the
next tick.
"""

import asyncio
from typing import override

from tempmon.lib.config import Settings
from tempmon.lib.exceptions import (
    MissingRecipientError,
    NotificationError,
    SensorError,
)
from tempmon.lib.notifications import AbstractNotifier, MailNotifier
from tempmon.lib.polling import PollingService
from tempmon.logging import get_logger
from tempmon.monitor.audit import evaluate
from tempmon.monitor.models import Decision, Notification, local_now
from tempmon.sensor.reader import read_temperature

logger = get_logger("monitor.polling")


class CPUTempPollingService(PollingService[float]):
    """Polling service for the CPU thermal zone."""

    def __init__(
        self, settings: Settings, notifier: AbstractNotifier | None = None
    ) -> None:
        super().__init__(name="cpu-temp", interval=settings.interval)
        self._settings = settings
        self._notifier = notifier or MailNotifier(settings)

    @override
    async def poll(self) -> float:
        """Read the current CPU temperature."""
        temperature = await asyncio.to_thread(
            read_temperature, self._settings.sensor_path
        )
        logger.info("Current CPU temperature: %.2f°C", temperature)
        return temperature

    @override
    async def audit(self, reading: float) -> None:
        """Send an alert email if the reading is above the threshold."""
        cfg = self._settings
        if evaluate(reading, cfg) is Decision.NO_ACTION or not cfg.has_recipient:
            return

        logger.info("Sending email notification")
        notification = Notification.alert(
            cfg.hostname, reading, cfg.threshold, local_now()
        )
        await self._notifier.send(notification.subject, notification.body)

    @override
    def on_poll_error(self, error: Exception) -> None:
        """Log sensor and mail failures without a traceback."""
        if isinstance(error, SensorError):
            logger.error("Error reading CPU temperature: %s", error)
        elif isinstance(error, NotificationError):
            logger.error("Error sending alert email: %s", error)
        else:
            super().on_poll_error(error)


async def send_test_email(
    settings: Settings, notifier: AbstractNotifier | None = None
) -> None:
    """Send a one-off test email with the current CPU temperature.

    Raises:
        MissingRecipientError: If no recipient is configured. The sensor
            is not read in that case.
        SensorError: If the temperature cannot be read.
        NotificationError: If the email cannot be sent.
    """
    if not settings.has_recipient:
        raise MissingRecipientError()

    temperature = await asyncio.to_thread(read_temperature, settings.sensor_path)
    notification = Notification.test(settings.hostname, temperature, local_now())
    await (notifier or MailNotifier(settings)).send(
        notification.subject, notification.body
    )
