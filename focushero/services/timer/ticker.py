"""Periodic one-second ticker bound to the running asyncio loop"""
import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class TickerHandle:
    """
    A running periodic trigger. The owner must call cancel() on every exit
    path (pause, reset, expiry, teardown); cancel() is idempotent.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 1.0):
        self._callback = callback
        self._interval = interval
        self._cancelled = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        # The callback itself may cancel its own ticker; let the loop exit on the flag then
        if not self._task.done() and self._task is not asyncio.current_task():
            self._task.cancel()

    async def _run(self):
        try:
            while not self._cancelled:
                await asyncio.sleep(self._interval)
                if self._cancelled:
                    break
                try:
                    self._callback()
                except Exception as e:
                    logger.error(f"Ticker callback failed: {e}")
        except asyncio.CancelledError:
            logger.debug("Ticker cancelled")


def start_ticker(callback: Callable[[], None], interval: float = 1.0) -> TickerHandle:
    """Start calling `callback` every `interval` seconds; returns the cancellation handle"""
    return TickerHandle(callback, interval)
