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
        default="sqlite:///./synergysphere.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC+HH:MM offset) used for persisted timestamps",
    )
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed by the CORS middleware",
    )
    reports_dir: str = Field(
        default="reports",
        description="Directory where generated report artifacts are written",
        min_length=1,
    )
    notification_ttl_days: int = Field(
        default=30,
        description="Days after creation before a notification expires",
        gt=0,
    )
    github_webhook_secret: str | None = Field(
        default=None,
        description="Shared secret used to verify GitHub webhook signatures",
    )
    credentials_encryption_key: str | None = Field(
        default=None,
        description="Fernet key used to encrypt third-party credentials at rest",
    )
    scheduler_enabled: bool = Field(
        default=True,
        description="Start the cron scheduler together with the application",
    )
    scheduler_timezone: str = Field(
        default="UTC",
        description="Timezone used to evaluate the cron schedule table",
    )

    log_level: str = Field(
        default="INFO",
        description="Root logging level configured when the application starts",
    )

    @model_validator(mode="after")
    def _validate_encryption_key(self) -> "Settings":
        key = self.credentials_encryption_key
        if key is not None and not key.strip():
            raise ValueError("CREDENTIALS_ENCRYPTION_KEY must not be blank when provided")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
