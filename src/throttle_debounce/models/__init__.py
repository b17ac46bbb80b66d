"""Data models for the throttler."""

from throttle_debounce.models.schema import ApiThrottlerConfig, ThrottlerStats

__all__ = ["ApiThrottlerConfig", "ThrottlerStats"]
