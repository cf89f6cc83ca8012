"""Unit tests for application settings."""

import pytest

from spidertype.application.config import Settings


def test_settings_defaults(monkeypatch):
    """Test the default session settings."""
    for name in ("DEFAULT_DURATION", "DEFAULT_LANGUAGE", "OVERFLOW_COUNTS_AS_ERROR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None)

    assert config.app_name == "spidertype"
    assert config.allowed_durations == [15, 30, 60, 120]
    assert config.default_duration == 30
    assert config.default_language == "javascript"
    assert config.tick_interval_seconds == 1.0
    assert config.overflow_counts_as_error is True
    assert config.log_level == "INFO"


def test_settings_from_environment(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("DEFAULT_DURATION", "60")
    monkeypatch.setenv("DEFAULT_LANGUAGE", "python")
    monkeypatch.setenv("OVERFLOW_COUNTS_AS_ERROR", "false")
    monkeypatch.setenv("ALLOWED_DURATIONS", "[15, 60]")

    config = Settings(_env_file=None)

    assert config.default_duration == 60
    assert config.default_language == "python"
    assert config.overflow_counts_as_error is False
    assert config.allowed_durations == [15, 60]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
