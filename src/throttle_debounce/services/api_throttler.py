# ABOUTME: Rate limits async API calls with queuing and in-flight deduplication.
# ABOUTME: Composes RateLimiter, RequestDeduplicator and RetryQueue behind one call().
"""API call throttler: sliding-window limit, FIFO retry queue, key dedup."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Set, TypeVar

from throttle_debounce.models.schema import ApiThrottlerConfig, ThrottlerStats
from throttle_debounce.observability.throttle_metrics import (
    record_cancelled,
    record_failure,
    record_queue_depth,
    record_queue_wait,
    record_request,
)
from throttle_debounce.services.deduplicator import RequestDeduplicator
from throttle_debounce.services.retry_queue import AsyncAction, QueuedRequest, RetryQueue
from throttle_debounce.utils.error_codes import ThrottleOutcome
from throttle_debounce.utils.logging import get_logger, log_event
from throttle_debounce.utils.rate_limit import RateLimiter

logger = get_logger(__name__)

T = TypeVar("T")
P = TypeVar("P")


class ThrottlerDisposedError(RuntimeError):
    """Raised when a disposed ApiThrottler is asked to run a request."""


class ApiThrottler:
    """Throttle async API calls against a sliding window.

    A call is first matched against in-flight executions sharing its key
    (deduplication), then admitted if the window has capacity. Calls that
    arrive while the window is full are queued and released one per drain
    tick as capacity frees up. With queuing disabled the limit is advisory:
    the call runs anyway and still counts against the window.

    Example::

        throttler = ApiThrottler(requests_per_interval=10, interval=60.0)
        user = await throttler.call("get_user", lambda: client.fetch_user(42))
    """

    def __init__(
        self,
        config: Optional[ApiThrottlerConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        **overrides: Any,
    ) -> None:
        """Initialize the throttler.

        Args:
            config: Full configuration; defaults come from settings
            clock: Monotonic clock in seconds used for the sliding window
            **overrides: Individual ApiThrottlerConfig fields

        Raises:
            pydantic.ValidationError: On non-positive capacity, interval or tick
        """
        if config is None:
            config = ApiThrottlerConfig(**overrides)
        elif overrides:
            config = ApiThrottlerConfig(**{**config.model_dump(), **overrides})
        self.config = config
        self._limiter = RateLimiter(config.requests_per_interval, config.interval, clock=clock)
        self._dedup = RequestDeduplicator()
        self._queue = RetryQueue()
        self._running: Set[asyncio.Task[Any]] = set()
        self._drain_task: Optional[asyncio.Task[None]] = None
        self._disposed = False

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def requests_per_interval(self) -> int:
        return self.config.requests_per_interval

    @property
    def interval(self) -> float:
        return self.config.interval

    @property
    def enable_queuing(self) -> bool:
        return self.config.enable_queuing

    @property
    def enable_deduplication(self) -> bool:
        return self.config.enable_deduplication

    async def call(self, key: str, action: Callable[[], Awaitable[T]]) -> T:
        """Run ``action`` under the rate limit and return its result.

        Args:
            key: Identifies logically identical requests for deduplication
            action: Zero-argument coroutine function performing the request

        Returns:
            The action's result (shared with any deduplicated co-callers)

        Raises:
            ThrottlerDisposedError: If the throttler has been disposed
            asyncio.CancelledError: If the request was queued and then
                discarded by cancel_queued_requests(), reset() or dispose()
            Exception: Whatever the action raised
        """
        if self._disposed:
            raise ThrottlerDisposedError(f"ApiThrottler '{self.name}' has been disposed")

        if self.enable_deduplication and key in self._dedup:
            record_request(self.name, ThrottleOutcome.DEDUPLICATED)
            return await self._dedup.join(key)

        if self._limiter.is_limited():
            if self.enable_queuing:
                return await self._enqueue(key, action)
            record_request(self.name, ThrottleOutcome.BYPASSED)
        else:
            record_request(self.name, ThrottleOutcome.ADMITTED)

        task = self._execute(key, action)
        return await asyncio.shield(task)

    async def call_with_parameter(
        self,
        key: str,
        parameter: P,
        action: Callable[[P], Awaitable[T]],
    ) -> T:
        """Like :meth:`call`, binding ``parameter`` into ``action``."""
        return await self.call(key, lambda: action(parameter))

    @property
    def requests_in_current_interval(self) -> int:
        return self._limiter.requests_in_window()

    @property
    def remaining_requests(self) -> int:
        return self._limiter.remaining_capacity()

    @property
    def queued_requests_count(self) -> int:
        return len(self._queue)

    @property
    def in_flight_count(self) -> int:
        return len(self._dedup)

    @property
    def is_rate_limited(self) -> bool:
        return self._limiter.is_limited()

    @property
    def time_until_next_slot(self) -> float:
        """Seconds until a request can be admitted; 0.0 when not limited."""
        return self._limiter.time_until_next_slot()

    def snapshot(self) -> ThrottlerStats:
        return ThrottlerStats(
            name=self.name,
            requests_per_interval=self.requests_per_interval,
            requests_in_current_interval=self.requests_in_current_interval,
            remaining_requests=self.remaining_requests,
            queued_requests=self.queued_requests_count,
            in_flight_requests=self.in_flight_count,
            is_rate_limited=self.is_rate_limited,
            time_until_next_slot=self.time_until_next_slot,
        )

    def cancel_queued_requests(self) -> int:
        """Discard every queued request and stop the drain loop.

        Executions already in progress are not affected. Callers awaiting a
        discarded request receive ``asyncio.CancelledError``.

        Returns:
            Number of requests removed from the queue
        """
        if self._drain_task is not None:
            self._drain_task.cancel()
            self._drain_task = None
        cancelled = self._queue.cancel_all()
        if cancelled:
            record_cancelled(self.name, cancelled)
            log_event(logger, "queued_requests_cancelled", throttler=self.name, count=cancelled)
        record_queue_depth(self.name, 0)
        return cancelled

    def reset(self) -> None:
        """Clear the sliding window and cancel queued requests.

        In-flight executions keep running; they no longer count against the
        window.
        """
        self._limiter.reset()
        self.cancel_queued_requests()

    def dispose(self) -> None:
        """Cancel queued requests; no drain tick fires afterward."""
        self.cancel_queued_requests()
        if not self._disposed:
            self._disposed = True
            log_event(logger, "throttler_disposed", throttler=self.name)

    def _execute(self, key: str, action: AsyncAction) -> asyncio.Task[Any]:
        self._limiter.record_execution()
        task = asyncio.get_running_loop().create_task(self._run(key, action))
        self._running.add(task)
        task.add_done_callback(self._forget)
        if self.enable_deduplication:
            self._dedup.track(key, task)
        return task

    async def _run(self, key: str, action: AsyncAction) -> Any:
        try:
            return await action()
        except Exception as exc:
            record_failure(self.name)
            log_event(
                logger,
                "throttled_action_failed",
                logging.WARNING,
                throttler=self.name,
                key=key,
                error=repr(exc),
            )
            raise

    def _forget(self, task: asyncio.Task[Any]) -> None:
        self._running.discard(task)
        if not task.cancelled():
            # Failures are logged in _run; mark them retrieved.
            task.exception()

    async def _enqueue(self, key: str, action: AsyncAction) -> Any:
        request = self._queue.enqueue(key, action)
        depth = len(self._queue)
        record_request(self.name, ThrottleOutcome.QUEUED)
        record_queue_depth(self.name, depth)
        log_event(logger, "request_queued", logging.DEBUG, throttler=self.name, key=key, depth=depth)
        request.future.add_done_callback(lambda future: self._abandon(request, future))
        self._ensure_drain()
        return await request.future

    def _abandon(self, request: QueuedRequest, future: asyncio.Future[Any]) -> None:
        # Only a caller cancelling its own await leaves the entry queued.
        if not future.cancelled() or not self._queue.discard(request):
            return
        depth = len(self._queue)
        record_queue_depth(self.name, depth)
        log_event(
            logger,
            "queued_request_abandoned",
            logging.DEBUG,
            throttler=self.name,
            key=request.key,
            depth=depth,
        )

    def _ensure_drain(self) -> None:
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        while True:
            await asyncio.sleep(self.config.drain_tick)
            if not self._queue:
                return
            if self._limiter.is_limited():
                continue
            request = self._queue.pop_next()
            # Callers cancelled this iteration may not be discarded yet.
            while request is not None and request.future.done():
                request = self._queue.pop_next()
            if request is None:
                record_queue_depth(self.name, 0)
                return
            self._start_queued(request)

    def _start_queued(self, request: QueuedRequest) -> None:
        depth = len(self._queue)
        record_request(self.name, ThrottleOutcome.DRAINED)
        record_queue_wait(self.name, time.monotonic() - request.enqueued_at)
        record_queue_depth(self.name, depth)
        log_event(
            logger,
            "request_drained",
            logging.DEBUG,
            throttler=self.name,
            key=request.key,
            depth=depth,
        )
        task = self._execute(request.key, request.action)
        task.add_done_callback(request.settle_from)
