"""Periodic sweep scheduler."""

import asyncio
import logging

from loopbot.application.services import LoopScheduler

logger = logging.getLogger(__name__)


class SweepScheduler:
    """Fires the loop scheduler's sweep at a fixed interval.

    Runs as its own asyncio task, independent of the event ingestor.
    The first sweep fires one interval after start.
    """

    def __init__(self, loop_scheduler: LoopScheduler, interval_seconds: float) -> None:
        """Initialize the scheduler.

        Args:
            loop_scheduler: Scheduler whose sweep is fired.
            interval_seconds: Interval between sweeps.
        """
        self._loop_scheduler = loop_scheduler
        self._interval = interval_seconds
        self._stop_event = asyncio.Event()
        self._stop_event.set()  # Initially stopped

    async def start(self) -> None:
        """Start sweeping.

        This method runs until stop() is called.
        """
        if not self._stop_event.is_set():
            logger.warning("SweepScheduler already running")
            return

        self._stop_event.clear()
        logger.info("SweepScheduler started (interval: %.1fs)", self._interval)

        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                break
            except asyncio.TimeoutError:
                pass

            try:
                await self._loop_scheduler.sweep()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("Error in periodic sweep")

        self._stop_event.set()
        logger.info("SweepScheduler stopped")

    async def stop(self) -> None:
        """Stop the scheduler."""
        logger.info("Stopping SweepScheduler")
        self._stop_event.set()

    @property
    def is_running(self) -> bool:
        """Check if the scheduler is running."""
        return not self._stop_event.is_set()
