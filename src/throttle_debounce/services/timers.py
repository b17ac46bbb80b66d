"""Single-timer plumbing shared by the debouncer and throttler utilities."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

from throttle_debounce.utils.logging import get_logger, log_event

logger = get_logger(__name__)


class LoopTimer:
    """Owns at most one pending ``loop.call_later`` handle.

    Callbacks may be plain functions or coroutine functions; awaitable results
    are scheduled as tasks on the running loop. Failures of callbacks fired by
    the timer, sync or async, are logged as ``timer_callback_failed``.
    """

    def __init__(self) -> None:
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task[Any]] = set()

    @property
    def is_active(self) -> bool:
        """True while a scheduled callback has neither fired nor been cancelled."""
        return self._handle is not None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def dispose(self) -> None:
        self.cancel()

    def _schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(max(0.0, delay), self._fire, callback, args)

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        try:
            self._invoke(callback, *args)
        except Exception as exc:
            self._log_failure(exc)

    def _invoke(self, callback: Callable[..., Any], *args: Any) -> None:
        result = callback(*args)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log_failure(exc)

    def _log_failure(self, exc: BaseException) -> None:
        log_event(
            logger,
            "timer_callback_failed",
            logging.ERROR,
            timer=type(self).__name__,
            error=repr(exc),
        )
