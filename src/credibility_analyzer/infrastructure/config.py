"""
Configuration Management
========================

Pydantic-settings based configuration for the scoring client, history
storage and logging. Reads from environment variables with sensible
defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """Configuration for the remote credibility scoring service."""

    model_config = SettingsConfigDict(env_prefix="SCORING_")

    endpoint_url: str = Field(
        default="https://credscore-355089345579.europe-west1.run.app/",
        description="Direct URL of the scoring backend",
    )
    relay_url: str = Field(
        default="http://localhost:5173/api/analyze",
        description="Same-origin relay forwarding to the scoring backend",
    )
    use_relay: bool = Field(
        default=False,
        description="Send requests through the relay instead of the backend directly",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="Overall budget for one analysis request",
    )
    connect_timeout_seconds: float = Field(default=5.0, ge=0.1)
    max_connections: int = Field(default=10, ge=1)
    user_agent: str = Field(default="CredibilityAnalyzer/0.1")

    # Status classification (see StatusClassificationPolicy)
    rejected_statuses: list[int] = Field(default_factory=lambda: [400, 401, 403])
    rate_limited_statuses: list[int] = Field(default_factory=lambda: [429])
    recoverable_statuses: list[int] = Field(
        default_factory=lambda: [404, 408, 500, 502, 503, 504]
    )

    @property
    def active_url(self) -> str:
        """The URL requests are sent to."""
        return self.relay_url if self.use_relay else self.endpoint_url


class RedisSettings(BaseSettings):
    """Configuration for Redis-backed history storage."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    host: str = Field(default="localhost")
    port: int = Field(default=6379)
    socket_path: str | None = Field(default=None, description="Path to Unix socket")
    password: SecretStr | None = Field(default=None)
    db: int = Field(default=0, ge=0)
    max_connections: int = Field(default=10, ge=1)


class HistorySettings(BaseSettings):
    """Configuration for the analysis history store."""

    model_config = SettingsConfigDict(env_prefix="HISTORY_")

    backend: Literal["memory", "file", "redis"] = Field(
        default="file",
        description="Storage backend holding the history slot",
    )
    file_path: Path = Field(
        default_factory=lambda: Path.home() / ".credibility_analyzer" / "history.json",
        description="JSON file used by the 'file' backend",
    )
    slot_key: str = Field(default="misinformation-analyzer-history")
    capacity: int = Field(default=10, ge=1)


class ExtractionSettings(BaseSettings):
    """Configuration for image text extraction input checks."""

    model_config = SettingsConfigDict(env_prefix="EXTRACTION_")

    max_image_bytes: int = Field(default=10 * 1024 * 1024, ge=1)


class Settings(BaseSettings):
    """
    Root configuration aggregating all settings groups.

    Usage:
        settings = get_settings()
        url = settings.scoring.active_url
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)

    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    locale: Literal["en", "hi", "mr"] = Field(default="en")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance, reading from environment on first call.
    """
    return Settings()
