"""
Rate budget for the generative service.

The default strategy spaces consecutive calls by a fixed interval (4 s keeps
a batch under a 15 requests/minute ceiling). The sliding-window strategy only
sleeps when the next call would exceed ``max_requests`` per ``window_seconds``.
Neither inspects rate-limit responses or adapts its delay.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Protocol

from ..core.config import Settings
from ..core.logging import get_logger

logger = get_logger(__name__)

Sleep = Callable[[float], None]
Clock = Callable[[], float]


class Throttle(Protocol):
    """Anything the orchestrator can wait on between two service calls."""

    waits: int

    def wait(self) -> None: ...


class FixedIntervalThrottle:
    """Suspend the caller for a fixed interval on every ``wait()``."""

    def __init__(self, interval_seconds: float = 4.0, sleep: Sleep = time.sleep) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        self.interval_seconds = interval_seconds
        self._sleep = sleep
        self.waits = 0

    def wait(self) -> None:
        self.waits += 1
        logger.info("rate_limit_wait", seconds=self.interval_seconds)
        self._sleep(self.interval_seconds)


class SlidingWindowThrottle:
    """
    Allow at most ``max_requests`` calls per ``window_seconds``.

    Call timestamps are kept in a deque; ``wait()`` drops those older than the
    window and sleeps until the oldest one expires when the window is full.
    The first call of a batch is made without waiting, so construction time
    stands in for it.
    """

    def __init__(
        self,
        max_requests: int = 15,
        window_seconds: float = 60.0,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque([clock()])
        self.waits = 0

    def _cleanup(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window_seconds:
            self._timestamps.popleft()

    def wait(self) -> None:
        self.waits += 1
        now = self._clock()
        self._cleanup(now)
        if len(self._timestamps) >= self.max_requests:
            delay = self._timestamps[0] + self.window_seconds - now
            if delay > 0:
                logger.info("rate_limit_wait", seconds=round(delay, 2))
                self._sleep(delay)
            now = self._clock()
            self._cleanup(now)
        self._timestamps.append(now)


def build_throttle(config: Settings, sleep: Sleep = time.sleep) -> Throttle:
    """Create the throttle selected by ``throttle_strategy``."""
    if config.throttle_strategy == "window":
        return SlidingWindowThrottle(
            max_requests=config.rate_limit_per_minute,
            window_seconds=60.0,
            sleep=sleep,
        )
    return FixedIntervalThrottle(config.throttle_interval_seconds, sleep=sleep)
