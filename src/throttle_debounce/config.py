"""Configuration management for the throttle/debounce utilities."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="THROTTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "throttle-debounce"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    log_format: Literal["auto", "text", "json"] = Field(
        default="auto", description="'auto' emits JSON only in production"
    )
    log_stream: Literal["stdout", "stderr"] = "stderr"

    # Observability
    metrics_enabled: bool = True

    # ApiThrottler defaults
    api_requests_per_interval: int = Field(
        default=60, gt=0, description="Requests admitted per sliding window"
    )
    api_interval_seconds: float = Field(
        default=60.0, gt=0, description="Sliding window length in seconds"
    )
    api_enable_queuing: bool = Field(
        default=True, description="Queue requests that exceed the rate limit"
    )
    api_enable_deduplication: bool = Field(
        default=True, description="Share in-flight results between identical keys"
    )
    api_drain_tick_seconds: float = Field(
        default=0.1, gt=0, description="Period of the queue drain loop"
    )

    # Timer utilities
    debounce_delay_seconds: float = Field(default=0.3, ge=0)
    throttle_interval_seconds: float = Field(default=1.0, ge=0)
    search_min_length: int = Field(default=1, ge=0)
    search_trim_query: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


# Global settings instance
settings = Settings()
