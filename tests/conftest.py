"""Shared fixtures for the SpiderType test suite."""

from datetime import datetime

import pytest

from spidertype.domain.services import ProgressService
from spidertype.infrastructure.local_progress_repository import LocalProgressRepository
from spidertype.infrastructure.local_session_result_repository import LocalSessionResultRepository


class ManualTimer:
    """Pending callback in a ManualScheduler."""

    def __init__(self, when: float, seq: int, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls ``advance``."""

    def __init__(self, start: float = 0.0):
        self.time = start
        self._timers: list[ManualTimer] = []
        self._seq = 0

    def now(self) -> float:
        return self.time

    def after(self, delay, callback) -> ManualTimer:
        timer = ManualTimer(self.time + delay, self._seq, callback)
        self._seq += 1
        self._timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in schedule order."""
        target = self.time + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(timer)
            self.time = timer.when
            timer.callback()
        self.time = target

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self._timers if not t.cancelled]


class FixedClock:
    """Wall clock for the progress service that tests can move by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def scheduler():
    """Create a manual scheduler starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def clock():
    """Create a wall clock fixed at midday."""
    return FixedClock(datetime(2026, 3, 10, 12, 0, 0))


@pytest.fixture
def progress_repository():
    """Create a fresh LocalProgressRepository for each test."""
    return LocalProgressRepository()


@pytest.fixture
def result_repository():
    """Create a fresh LocalSessionResultRepository for each test."""
    return LocalSessionResultRepository()


@pytest.fixture
def progress_service(progress_repository, result_repository, clock):
    """Create a progress service over in-memory repositories."""
    return ProgressService(
        progress_repository=progress_repository,
        session_result_repository=result_repository,
        clock=clock,
    )
