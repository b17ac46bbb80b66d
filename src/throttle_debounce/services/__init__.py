"""Service layer: the API throttler and its single-timer siblings."""

from throttle_debounce.services.api_throttler import ApiThrottler, ThrottlerDisposedError
from throttle_debounce.services.debouncer import Debouncer
from throttle_debounce.services.deduplicator import RequestDeduplicator
from throttle_debounce.services.retry_queue import QueuedRequest, RetryQueue
from throttle_debounce.services.search_debouncer import SearchDebouncer
from throttle_debounce.services.throttler import Throttler

__all__ = [
    "ApiThrottler",
    "ThrottlerDisposedError",
    "Debouncer",
    "RequestDeduplicator",
    "QueuedRequest",
    "RetryQueue",
    "SearchDebouncer",
    "Throttler",
]
