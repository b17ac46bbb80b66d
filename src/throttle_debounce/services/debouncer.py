"""Helpers for debouncing high-frequency UI events."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from throttle_debounce.config import settings
from throttle_debounce.services.timers import LoopTimer

__all__ = ["Debouncer"]

P = TypeVar("P")


class Debouncer(LoopTimer):
    """Run the latest callback once calls stop arriving for ``delay`` seconds."""

    def __init__(self, delay: Optional[float] = None) -> None:
        super().__init__()
        self.delay = settings.debounce_delay_seconds if delay is None else max(0.0, float(delay))

    def call(self, callback: Callable[[], Any]) -> None:
        """Restart the quiet period; ``callback`` replaces any pending one."""
        self._schedule(self.delay, callback)

    def call_with_parameter(self, parameter: P, callback: Callable[[P], Any]) -> None:
        self._schedule(self.delay, callback, parameter)
