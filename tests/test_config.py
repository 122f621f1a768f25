"""Tests for Pydantic Settings configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator

from core.config import (
    DEFAULT_PROVIDERS,
    CacheSettings,
    LoggingSettings,
    ProviderSettings,
    RedisSettings,
    Settings,
    get_settings,
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Remove environment variables that would affect defaults."""
    prefixes = ("PROVIDERS_", "CACHE_", "REDIS_", "LOG_", "ENVIRONMENT", "ALLOWED_HOSTS")
    for key in list(os.environ.keys()):
        if key.startswith(prefixes):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch


class TestProviderSettings:
    """Tests for ProviderSettings."""

    def test_default_values(self, clean_env: pytest.MonkeyPatch) -> None:
        """ProviderSettings should have sensible defaults."""
        settings = ProviderSettings()

        assert settings.base_url == "http://localhost:8000"
        assert settings.timeout == 15.0
        assert settings.request_timeout == 20.0
        assert settings.enabled == DEFAULT_PROVIDERS

    def test_enabled_from_env_csv(self, clean_env: pytest.MonkeyPatch) -> None:
        """PROVIDERS_ENABLED should be parsed as a comma-separated list."""
        clean_env.setenv("PROVIDERS_ENABLED", "Paytm, abhibus ,")

        settings = ProviderSettings()

        assert settings.enabled == ["paytm", "abhibus"]

    def test_timeout_from_env(self, clean_env: pytest.MonkeyPatch) -> None:
        """PROVIDERS_TIMEOUT should override the race timeout."""
        clean_env.setenv("PROVIDERS_TIMEOUT", "2.5")

        assert ProviderSettings().timeout == 2.5

    def test_timeout_must_be_positive(self) -> None:
        """A non-positive timeout should be rejected."""
        with pytest.raises(ValidationError):
            ProviderSettings(timeout=0)

    def test_enabled_from_list(self) -> None:
        """enabled should accept a list and lowercase it."""
        settings = ProviderSettings(enabled=["GOIBIBO"])

        assert settings.enabled == ["goibibo"]


class TestCacheSettings:
    """Tests for CacheSettings."""

    def test_default_values(self, clean_env: pytest.MonkeyPatch) -> None:
        """CacheSettings should default to five minutes and thirty days."""
        settings = CacheSettings()

        assert settings.result_ttl == 300
        assert settings.last_query_ttl == 60 * 60 * 24 * 30

    def test_ttl_must_be_positive(self) -> None:
        """A zero TTL should be rejected."""
        with pytest.raises(ValidationError):
            CacheSettings(result_ttl=0)


class TestRedisSettings:
    """Tests for RedisSettings."""

    def test_default_url(self, clean_env: pytest.MonkeyPatch) -> None:
        """Redis URL should be unset by default."""
        assert RedisSettings().url is None


class TestLoggingSettings:
    """Tests for LoggingSettings."""

    def test_default_values(self, clean_env: pytest.MonkeyPatch) -> None:
        """LoggingSettings should default to INFO console output."""
        settings = LoggingSettings()

        assert settings.level == "INFO"
        assert settings.json_format is False

    def test_rejects_unknown_level(self) -> None:
        """An unknown level should be rejected."""
        with pytest.raises(ValidationError):
            LoggingSettings(level="VERBOSE")


class TestSettings:
    """Tests for main Settings class."""

    def test_default_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        """Default environment should be development."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.is_development is True

    def test_environment_properties(self) -> None:
        """Environment properties should reflect the environment."""
        prod = Settings(environment="production")
        test = Settings(environment="test")

        assert prod.is_production is True
        assert prod.is_development is False
        assert test.is_test is True

    def test_parse_allowed_hosts_from_string(self) -> None:
        """allowed_hosts should parse a comma-separated string."""
        settings = Settings(allowed_hosts="api.example.com, localhost")

        assert settings.allowed_hosts == ["api.example.com", "localhost"]

    def test_parse_allowed_hosts_from_env(self, clean_env: pytest.MonkeyPatch) -> None:
        """ALLOWED_HOSTS should be read as a comma-separated string."""
        clean_env.setenv("ALLOWED_HOSTS", "a.example.com,b.example.com")

        assert Settings().allowed_hosts == ["a.example.com", "b.example.com"]

    def test_nested_settings(self, clean_env: pytest.MonkeyPatch) -> None:
        """Settings should expose every configuration section."""
        settings = Settings()

        assert isinstance(settings.providers, ProviderSettings)
        assert isinstance(settings.cache, CacheSettings)
        assert isinstance(settings.redis, RedisSettings)
        assert isinstance(settings.logging, LoggingSettings)

    def test_secret_key_is_hidden(self) -> None:
        """secret_key should not leak through repr."""
        settings = Settings(secret_key="very-secret")

        assert "very-secret" not in repr(settings)
        assert settings.secret_key.get_secret_value() == "very-secret"


class TestGetSettings:
    """Tests for get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()

        assert isinstance(get_settings(), Settings)

    def test_get_settings_is_cached(self) -> None:
        """get_settings should return the same instance."""
        get_settings.cache_clear()

        assert get_settings() is get_settings()
