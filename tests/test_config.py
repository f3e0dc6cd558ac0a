"""Tests for configuration module."""

from __future__ import annotations

import dataclasses

import pytest

from core.config import Settings, _ENV_PROFILES, get_database_url, get_settings


def test_settings_dataclass_defaults():
    s = Settings(database_url="postgresql://localhost/test")
    assert s.database_url == "postgresql://localhost/test"
    assert s.app_env == "dev"
    assert s.auth_jwt_algorithm == "HS256"
    assert s.auth_jwt_audience == "authenticated"
    assert s.session_fatigue_increment == 5
    assert s.readiness_primed_threshold == 65
    assert s.request_id_header_name == "X-Request-ID"


def test_settings_frozen():
    s = Settings(database_url="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.database_url = "y"


def test_settings_env_flags():
    assert Settings(database_url="x", app_env="production").is_production is True
    assert Settings(database_url="x", app_env="dev").is_dev is True
    assert Settings(database_url="x", app_env="staging").is_dev is False


def test_get_database_url_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://from-env/db")
    assert get_database_url() == "postgresql://from-env/db"


def test_get_database_url_default(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert get_database_url().startswith("postgresql")


def test_env_profiles_exist():
    for env in ("dev", "staging", "production", "test"):
        assert env in _ENV_PROFILES


def test_test_profile_disables_rate_limit(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("RATE_LIMIT_ENABLED", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    s = get_settings()
    assert s.rate_limit_enabled is False
    assert s.log_level == "WARNING"


def test_unknown_env_falls_back_to_dev_profile(monkeypatch):
    monkeypatch.setenv("APP_ENV", "qa")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("CHAT_RATE_LIMIT", raising=False)
    s = get_settings()
    assert s.log_level == "DEBUG"
    assert s.chat_rate_limit == "60/minute"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example ,")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "no")
    monkeypatch.setenv("SESSION_FATIGUE_INCREMENT", "8")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://llm.example/v1/")
    s = get_settings()
    assert s.is_production
    assert s.cors_origins == ("https://a.example", "https://b.example")
    assert s.rate_limit_enabled is False
    assert s.session_fatigue_increment == 8
    assert s.openai_base_url == "https://llm.example/v1"
