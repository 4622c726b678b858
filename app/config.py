"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC offset) used for stored timestamps",
    )
    stream_max_lifetime_seconds: float = Field(
        default=30 * 60,
        description="Maximum lifetime of a notification event stream",
        gt=0,
    )
    heartbeat_interval_seconds: float = Field(
        default=30,
        description="Seconds between heartbeat events sent to every open stream",
        gt=0,
    )
    stream_backlog_size: int = Field(
        default=100,
        description="Pending events allowed per stream before it is considered dead",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Level for the ``app`` logger")

    @model_validator(mode="after")
    def _validate_stream_timings(self) -> "Settings":
        if self.heartbeat_interval_seconds >= self.stream_max_lifetime_seconds:
            raise ValueError(
                "HEARTBEAT_INTERVAL_SECONDS must be shorter than STREAM_MAX_LIFETIME_SECONDS"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
