"""asyncio implementation of the Scheduler interface."""

import asyncio
from typing import Callable, Optional

from ..domain.interfaces.scheduler import Scheduler


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running event loop's clock and ``call_later``.

    Callbacks run on the loop thread, so they may touch asyncio queues
    with ``put_nowait`` directly.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on (defaults to the running loop).
        """
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        """Return the loop's monotonic time in seconds."""
        return self.loop.time()

    def after(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Schedule ``callback`` on the loop after ``delay`` seconds."""
        return self.loop.call_later(delay, callback)
