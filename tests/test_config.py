"""Configuration — environment parsing and validation of Settings.

Tests cover:
    - Defaults
    - ENVEX_-prefixed env vars, including JSON registry extensions
    - Negative codes and unknown log formats are rejected
    - get_settings() is cached
"""

import pytest
from pydantic import ValidationError

from envex.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.extra_functions == {}
    assert settings.max_message_bytes == 1_048_576


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ENVEX_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ENVEX_EXTRA_FUNCTIONS", '{"100": "sqrt", "101": "pow"}')
    monkeypatch.setenv("ENVEX_MAX_MESSAGE_BYTES", "2048")
    settings = Settings()
    assert settings.log_level == "DEBUG"
    assert settings.extra_functions == {100: "sqrt", 101: "pow"}
    assert settings.max_message_bytes == 2048


def test_negative_code_rejected():
    with pytest.raises(ValidationError):
        Settings(extra_parameters={-1: "bad"})


def test_unknown_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_code_beyond_64_bits_rejected():
    with pytest.raises(ValidationError):
        Settings(extra_functions={2**64: "huge"})
