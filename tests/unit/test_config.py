"""Unit tests for settings and throttler configuration."""

import pytest
from pydantic import ValidationError

from throttle_debounce import config as config_module
from throttle_debounce.config import Settings
from throttle_debounce.models.schema import ApiThrottlerConfig


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("THROTTLE_API_REQUESTS_PER_INTERVAL", "5")
    monkeypatch.setenv("THROTTLE_API_ENABLE_QUEUING", "false")
    monkeypatch.setenv("THROTTLE_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.api_requests_per_interval == 5
    assert settings.api_enable_queuing is False
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("THROTTLE_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        Settings()


def test_settings_reject_non_positive_interval(monkeypatch):
    monkeypatch.setenv("THROTTLE_API_INTERVAL_SECONDS", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_throttler_config_defaults_follow_settings(monkeypatch):
    monkeypatch.setattr(config_module.settings, "api_requests_per_interval", 12)
    monkeypatch.setattr(config_module.settings, "api_enable_deduplication", False)

    cfg = ApiThrottlerConfig()

    assert cfg.requests_per_interval == 12
    assert cfg.enable_deduplication is False


def test_throttler_config_is_frozen():
    cfg = ApiThrottlerConfig(requests_per_interval=3)

    with pytest.raises(ValidationError):
        cfg.requests_per_interval = 4
