"""Minimum-spacing rate limiter for the archive source.

The Open-Meteo archive API throttles aggressive clients, so every
upstream call goes through a shared ``RateLimiter`` that keeps at least
``min_interval`` seconds between the end of one call and the start of
the next.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from types import TracebackType

logger = logging.getLogger(__name__)


class RateLimiter:
    """Serialize upstream calls with a minimum gap between them.

    Use as a context manager around each request. Entering waits until
    the gap since the previous call ended has reached ``min_interval``;
    exiting records the end time. The lock is held for the whole call,
    so calls from concurrent threads never overlap.

    Args:
        min_interval: Seconds between the end of one call and the start
            of the next.
        clock: Monotonic clock returning seconds.
        sleep: Function used to wait.

    Example:
        >>> limiter = RateLimiter(min_interval=1.1)
        >>> with limiter:
        ...     pass  # issue the request here
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_call_end: float | None = None

    @property
    def min_interval(self) -> float:
        """Configured spacing in seconds."""
        return self._min_interval

    def wait_time(self) -> float:
        """Seconds the next call would have to wait right now."""
        if self._last_call_end is None:
            return 0.0
        elapsed = self._clock() - self._last_call_end
        return max(0.0, self._min_interval - elapsed)

    def __enter__(self) -> RateLimiter:
        self._lock.acquire()
        try:
            delay = self.wait_time()
            if delay > 0:
                logger.debug("Rate limit: waiting %.2fs before next request", delay)
                self._sleep(delay)
        except BaseException:
            self._lock.release()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._last_call_end = self._clock()
        self._lock.release()
