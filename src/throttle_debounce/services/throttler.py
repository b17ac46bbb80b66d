"""Fixed-interval throttling for UI callbacks."""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, TypeVar

from throttle_debounce.config import settings
from throttle_debounce.services.timers import LoopTimer

__all__ = ["Throttler"]

P = TypeVar("P")


class Throttler(LoopTimer):
    """Execute at most once per ``interval`` seconds.

    A call outside the interval runs immediately. A call inside it schedules a
    single trailing execution at the end of the interval, replacing any
    trailing execution scheduled earlier.
    """

    def __init__(
        self,
        interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.interval = (
            settings.throttle_interval_seconds if interval is None else max(0.0, float(interval))
        )
        self._clock = clock
        self._last_execution: Optional[float] = None

    def call(self, callback: Callable[[], Any]) -> None:
        self._throttle(callback)

    def call_with_parameter(self, parameter: P, callback: Callable[[P], Any]) -> None:
        self._throttle(callback, parameter)

    @property
    def time_until_next_execution(self) -> float:
        if self._last_execution is None:
            return 0.0
        remaining = self.interval - (self._clock() - self._last_execution)
        return max(0.0, remaining)

    def reset(self) -> None:
        self.cancel()
        self._last_execution = None

    def _throttle(self, callback: Callable[..., Any], *args: Any) -> None:
        now = self._clock()
        if self._last_execution is None or now - self._last_execution >= self.interval:
            self._last_execution = now
            self._invoke(callback, *args)
            return
        remaining = self.interval - (now - self._last_execution)
        self._schedule(remaining, self._trailing, callback, *args)

    def _trailing(self, callback: Callable[..., Any], *args: Any) -> None:
        self._last_execution = self._clock()
        self._invoke(callback, *args)
