"""Threshold evaluation for CPU temperature readings.

Stateless: every reading above the threshold produces an alert, so a
sustained overheat re-alerts on every tick.
"""

from tempmon.lib.config import Settings
from tempmon.logging import get_logger
from tempmon.monitor.models import Decision

logger = get_logger("monitor.audit")


def evaluate(reading: float, settings: Settings) -> Decision:
    """Compare a reading with the configured threshold.

    Returns ALERT only when the reading is strictly above the threshold.
    """
    if reading <= settings.threshold:
        logger.debug(
            "Temperature %.2f°C within threshold of %.2f°C",
            reading,
            settings.threshold,
        )
        return Decision.NO_ACTION

    logger.warning(
        "ALERT: Temperature %.2f°C exceeds threshold of %.2f°C",
        reading,
        settings.threshold,
    )
    if not settings.has_recipient:
        logger.info("No recipient configured: no email notification sent")
    return Decision.ALERT
