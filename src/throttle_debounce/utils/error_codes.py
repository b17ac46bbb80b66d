# ABOUTME: Defines canonical outcome codes for throttled requests.
# ABOUTME: Keeps log events and metric labels consistent across services.
"""Centralized outcome codes used across the throttler."""


class ThrottleOutcome:
    """String constants describing how a request was handled."""

    ADMITTED = "admitted"
    DEDUPLICATED = "deduplicated"
    QUEUED = "queued"
    BYPASSED = "bypassed"
    DRAINED = "drained"
    CANCELLED = "cancelled"
    FAILED = "failed"
