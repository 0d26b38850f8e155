"""Cancellation token for reasoning/acting cycles."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from loopbot.domain.exceptions import CycleCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """Cancellation signal shared by every suspending call of one cycle.

    A newer cycle for the same channel calls ``cancel()``; the older cycle
    observes it at its next suspension point (``run`` or ``sleep``) as a
    ``CycleCancelledError``.
    """

    def __init__(self) -> None:
        """Initialize the token (not cancelled)."""
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Signal cancellation. Idempotent."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Check whether cancellation was requested."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise CycleCancelledError if cancellation was requested."""
        if self.cancelled:
            raise CycleCancelledError()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token is cancelled first.

        Args:
            awaitable: The operation to run.

        Returns:
            The operation's result.

        Raises:
            CycleCancelledError: If the token was cancelled before the
                operation finished. The operation itself is cancelled.
        """
        task = asyncio.ensure_future(awaitable)
        if self.cancelled:
            task.cancel()
            raise CycleCancelledError()

        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            raise

        if task in done:
            waiter.cancel()
            return task.result()

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.debug("Operation failed while being cancelled", exc_info=True)
        raise CycleCancelledError()

    async def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds`` unless cancelled first.

        Raises:
            CycleCancelledError: If the token was cancelled while sleeping.
        """
        await self.run(asyncio.sleep(seconds))
