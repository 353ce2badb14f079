"""
LiftLog Session Clock
One-second tick source for the workout timer. The session only exposes tick();
the clock owns the scheduling and is stopped whenever the timer stops.
"""
import asyncio
import logging
from typing import Callable, Optional, Protocol

from config import settings

logger = logging.getLogger(__name__)


class Clock(Protocol):
    @property
    def running(self) -> bool:
        ...

    def start(self, callback: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...


class AsyncioClock:
    """Calls the callback every `interval` seconds from an asyncio task."""

    def __init__(self, interval: Optional[float] = None):
        self.interval = interval if interval is not None else settings.TIMER_TICK_SECONDS
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: Callable[[], None]) -> None:
        """Start ticking. Must be called from a running event loop. Restarts if already running."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run(callback))

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, callback: Callable[[], None]):
        while True:
            await asyncio.sleep(self.interval)
            try:
                callback()
            except Exception:
                logger.exception("[Clock] Tick callback failed")
