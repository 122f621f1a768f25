"""
Application configuration using Pydantic Settings.

Typed, validated settings loaded from environment variables and an optional
``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PROVIDERS = ["abhibus", "makemytrip", "paytm", "goibibo"]


def _split_csv(v: str | list[str]) -> list[str]:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class ProviderSettings(BaseSettings):
    """Settings for the upstream bus search providers."""

    model_config = SettingsConfigDict(env_prefix="PROVIDERS_")

    base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the provider search gateway",
    )
    timeout: float = Field(
        default=15.0,
        gt=0,
        description="Per-provider timeout in seconds for one aggregated search",
    )
    request_timeout: float = Field(
        default=20.0,
        gt=0,
        description="HTTP transport timeout in seconds",
    )
    enabled: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_PROVIDERS),
        description="Providers to query, in merge order",
    )

    @field_validator("enabled", mode="before")
    @classmethod
    def parse_enabled(cls, v: str | list[str]) -> list[str]:
        """Parse enabled providers from comma-separated string or list."""
        return [item.lower() for item in _split_csv(v)]


class CacheSettings(BaseSettings):
    """Settings for caller-side caching of search results."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    result_ttl: int = Field(default=300, ge=1, description="Search result TTL in seconds")
    last_query_ttl: int = Field(
        default=60 * 60 * 24 * 30,
        ge=1,
        description="Last query TTL in seconds",
    )


class RedisSettings(BaseSettings):
    """Redis connection settings."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    url: str | None = Field(default=None, description="Redis connection URL")


class LoggingSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_format: bool = False


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    secret_key: SecretStr = Field(
        default=SecretStr("django-insecure-change-me-in-production"),
        description="Django secret key",
    )
    allowed_hosts: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Allowed hosts",
    )

    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v: str | list[str]) -> list[str]:
        """Parse allowed hosts from comma-separated string or list."""
        return _split_csv(v)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
