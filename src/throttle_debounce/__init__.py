"""
Throttle/Debounce - call-rate control for asyncio applications

An API throttler combining a sliding-window rate limit, a FIFO retry queue
and in-flight request deduplication, plus debouncer and throttler timers
for high-frequency UI events.
"""

__version__ = "0.1.0"
