"""Configuration and state snapshot schemas."""

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from throttle_debounce.config import settings


class ApiThrottlerConfig(BaseModel):
    """Immutable per-instance configuration for ApiThrottler."""

    model_config = ConfigDict(frozen=True)

    requests_per_interval: int = Field(
        default_factory=lambda: settings.api_requests_per_interval,
        gt=0,
        description="Maximum executions admitted per interval",
    )
    interval: float = Field(
        default_factory=lambda: settings.api_interval_seconds,
        gt=0,
        description="Sliding window length in seconds",
    )
    enable_queuing: bool = Field(
        default_factory=lambda: settings.api_enable_queuing,
        description="Queue requests that exceed the rate limit",
    )
    enable_deduplication: bool = Field(
        default_factory=lambda: settings.api_enable_deduplication,
        description="Coalesce concurrent calls sharing a key",
    )
    drain_tick: float = Field(
        default_factory=lambda: settings.api_drain_tick_seconds,
        gt=0,
        description="Period of the queue drain loop in seconds",
    )
    name: str = Field(default="default", description="Label for logs and metrics")

    @field_validator("interval", "drain_tick", mode="before")
    @classmethod
    def coerce_timedelta(cls, v: Any) -> Any:
        """Accept datetime.timedelta wherever seconds are expected."""
        if isinstance(v, timedelta):
            return v.total_seconds()
        return v


class ThrottlerStats(BaseModel):
    """Point-in-time view of an ApiThrottler."""

    name: str
    requests_per_interval: int = Field(gt=0)
    requests_in_current_interval: int = Field(ge=0)
    remaining_requests: int = Field(ge=0)
    queued_requests: int = Field(ge=0)
    in_flight_requests: int = Field(ge=0)
    is_rate_limited: bool
    time_until_next_slot: float = Field(ge=0.0, description="Seconds until capacity frees")
