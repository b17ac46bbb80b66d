# ABOUTME: Provides the in-process sliding-window rate limiter.
# ABOUTME: Counts admitted executions over the trailing interval.
"""Sliding-window rate limiter used by the API throttler."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque


class RateLimiter:
    """Simple sliding-window rate limiter.

    Timestamps are appended in real time order, so expiry is a prefix removal
    from the oldest end. Capacity is enforced by callers at admission time,
    never by the purge.
    """

    def __init__(
        self,
        max_calls: int,
        period_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_calls = max_calls
        self.period = period_seconds
        self._clock = clock
        self._timestamps: Deque[float] = deque()

    def _purge(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.period:
            self._timestamps.popleft()

    def requests_in_window(self) -> int:
        self._purge(self._clock())
        return len(self._timestamps)

    def is_limited(self) -> bool:
        return self.requests_in_window() >= self.max_calls

    def remaining_capacity(self) -> int:
        return max(0, self.max_calls - self.requests_in_window())

    def record_execution(self) -> None:
        self._timestamps.append(self._clock())

    def allow(self) -> bool:
        """Record an execution if the window has room for it."""
        if self.is_limited():
            return False
        self.record_execution()
        return True

    def time_until_next_slot(self) -> float:
        """Seconds until the oldest timestamp leaves the window (0.0 if free now)."""
        now = self._clock()
        self._purge(now)
        if len(self._timestamps) < self.max_calls or not self._timestamps:
            return 0.0
        # The oldest entry may expire between the purge and this read.
        return max(0.0, self.period - (now - self._timestamps[0]))

    def reset(self) -> None:
        self._timestamps.clear()
