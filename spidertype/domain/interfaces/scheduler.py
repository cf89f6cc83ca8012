"""Clock and timer interface."""

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle to a pending callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not run yet."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for the clock and one-shot timers that drive a typing session.

    Implementations can use an event loop (asyncio), a UI toolkit timer,
    or a manual clock for tests.
    """

    def now(self) -> float:
        """Return a monotonic timestamp in seconds."""
        ...

    def after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds.

        Args:
            delay: Seconds to wait.
            callback: Zero-argument callable.

        Returns:
            TimerHandle: Handle whose ``cancel()`` stops the pending call.
        """
        ...
