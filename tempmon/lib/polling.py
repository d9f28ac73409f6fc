"""Generic async polling service abstraction.

Provides a reusable base class for services that follow the poll → audit
pattern at a fixed interval, stopping cleanly on SIGINT/SIGTERM.
"""

import asyncio
import signal
from abc import ABC, abstractmethod
from contextlib import suppress
from datetime import timedelta

from tempmon.logging import get_logger

_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class PollingService[T](ABC):
    """Abstract base class for async polling services.

    Implements the common polling loop pattern with:
    - An immediate first cycle, then one cycle per interval
    - Cycles that always run to completion (never overlapping)
    - Graceful shutdown handling
    - Error recovery
    """

    def __init__(self, name: str, interval: timedelta) -> None:
        """Initialize the polling service.

        Args:
            name: Service name for logging.
            interval: Time between the start of two cycles.
        """
        self.name = name
        self.interval = interval
        self._shutdown = asyncio.Event()
        self._logger = get_logger(f"polling.{name}")

    @abstractmethod
    async def poll(self) -> T | None:
        """Poll the sensor for a new reading.

        Returns:
            A reading, or None if the cycle should be skipped.
        """

    @abstractmethod
    async def audit(self, reading: T) -> None:
        """Audit the reading and act on it.

        Args:
            reading: The reading returned by poll().
        """

    def on_poll_error(self, error: Exception) -> None:
        """Handle an error that occurred during a cycle.

        Override to customize error handling. Default logs the error.
        """
        self._logger.error(
            "%s poll cycle failed: %s", self.name, error, exc_info=error
        )

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown.is_set()

    def request_shutdown(self) -> None:
        """Stop the loop once the current cycle has completed."""
        self._shutdown.set()

    def _handle_shutdown(self, sig: signal.Signals) -> None:
        """Handle shutdown signals gracefully."""
        self._logger.info("Received signal %s: shutting down", sig.name)
        self.request_shutdown()

    async def _poll_cycle(self) -> None:
        """Execute a single poll → audit cycle."""
        reading = await self.poll()
        if reading is not None:
            await self.audit(reading)

    async def _wait_next_tick(self, timeout: float) -> None:
        """Wait until the next tick or a shutdown request, whichever is first."""
        with suppress(TimeoutError):
            await asyncio.wait_for(self._shutdown.wait(), timeout=timeout)

    async def run_async(self) -> None:
        """Run the polling loop until shutdown is requested."""
        loop = asyncio.get_running_loop()
        for sig in _SHUTDOWN_SIGNALS:
            loop.add_signal_handler(sig, self._handle_shutdown, sig)

        self._logger.info("%s polling service started", self.name)
        try:
            while not self._shutdown.is_set():
                cycle_start = loop.time()

                try:
                    await self._poll_cycle()
                except Exception as e:
                    self.on_poll_error(e)

                # Sleep only the remaining time to maintain consistent intervals
                elapsed = loop.time() - cycle_start
                await self._wait_next_tick(
                    max(0.0, self.interval.total_seconds() - elapsed)
                )
        finally:
            for sig in _SHUTDOWN_SIGNALS:
                loop.remove_signal_handler(sig)
            self._logger.info("%s shutdown complete", self.name)

    def run(self) -> None:
        """Run the polling loop.

        This is the main entry point. It:
        1. Sets up signal handlers for graceful shutdown
        2. Runs one cycle immediately
        3. Enters the polling loop (poll → audit every interval)
        4. Returns once a shutdown signal has been handled
        """
        asyncio.run(self.run_async())
