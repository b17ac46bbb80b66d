"""Prometheus metrics for throttled request handling."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

from throttle_debounce.config import settings


THROTTLE_REQUESTS_TOTAL = Counter(
    "throttle_requests_total",
    "Requests handled by an ApiThrottler, by outcome",
    ["throttler", "outcome"],
)

THROTTLE_ACTION_FAILURES_TOTAL = Counter(
    "throttle_action_failures_total",
    "Throttled actions that raised an exception",
    ["throttler"],
)

THROTTLE_CANCELLED_TOTAL = Counter(
    "throttle_cancelled_total",
    "Queued requests discarded by bulk cancellation",
    ["throttler"],
)

THROTTLE_QUEUE_WAIT_SECONDS = Histogram(
    "throttle_queue_wait_seconds",
    "Time a request spent queued before it was drained",
    ["throttler"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60),
)

THROTTLE_QUEUE_DEPTH = Gauge(
    "throttle_queue_depth",
    "Requests currently waiting in the retry queue",
    ["throttler"],
)


def _enabled() -> bool:
    """Check whether metrics are enabled."""
    return bool(settings.metrics_enabled)


def record_request(throttler: str, outcome: str) -> None:
    """Record how a request was handled."""
    if not _enabled():
        return

    THROTTLE_REQUESTS_TOTAL.labels(throttler=throttler, outcome=outcome).inc()


def record_failure(throttler: str) -> None:
    """Record an action failure."""
    if not _enabled():
        return

    THROTTLE_ACTION_FAILURES_TOTAL.labels(throttler=throttler).inc()


def record_cancelled(throttler: str, count: int) -> None:
    """Record queued requests dropped by a bulk cancel."""
    if not _enabled() or count <= 0:
        return

    THROTTLE_CANCELLED_TOTAL.labels(throttler=throttler).inc(count)


def record_queue_wait(throttler: str, wait_seconds: float) -> None:
    """Record queue wait latency for a drained request."""
    if not _enabled():
        return

    THROTTLE_QUEUE_WAIT_SECONDS.labels(throttler=throttler).observe(max(wait_seconds, 0.0))


def record_queue_depth(throttler: str, depth: int) -> None:
    """Record the current retry queue depth."""
    if not _enabled():
        return

    THROTTLE_QUEUE_DEPTH.labels(throttler=throttler).set(max(depth, 0))
