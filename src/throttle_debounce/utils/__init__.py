"""Shared helpers: logging, rate limiting and outcome codes."""

from throttle_debounce.utils.error_codes import ThrottleOutcome
from throttle_debounce.utils.rate_limit import RateLimiter

__all__ = ["RateLimiter", "ThrottleOutcome"]
