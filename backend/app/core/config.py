"""
Application configuration using Pydantic Settings.
All configuration is loaded from environment variables.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.constants import AuthConstants, DatabaseConstants


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        extra="ignore"
    )

    # Required: DATABASE_URL
    url: str

    pool_size: int = DatabaseConstants.POOL_SIZE
    max_overflow: int = DatabaseConstants.MAX_OVERFLOW
    pool_timeout: int = DatabaseConstants.POOL_TIMEOUT_SECONDS
    pool_recycle: int = DatabaseConstants.POOL_RECYCLE_SECONDS

    @field_validator("url")
    @classmethod
    def normalize_driver(cls, v: str) -> str:
        """Route plain PostgreSQL URLs through the asyncpg driver."""
        for prefix in DatabaseConstants.SYNC_POSTGRES_PREFIXES:
            if v.startswith(prefix):
                return DatabaseConstants.ASYNC_POSTGRES_SCHEME + v[len(prefix):]
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def safe_url(self) -> str:
        """URL without credentials, for logging."""
        return self.url.split("@")[-1]


class AuthSettings(BaseSettings):
    """Session and authentication configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        extra="ignore"
    )

    # Required: AUTH_SECRET, used to sign session tokens
    secret: str = Field(min_length=1)

    session_max_age_days: int = AuthConstants.DEFAULT_SESSION_MAX_AGE_DAYS
    cookie_name: str = AuthConstants.SESSION_COOKIE_NAME
    cookie_secure: bool = True
    guest_enabled: bool = True

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_max_age_days * AuthConstants.SECONDS_PER_DAY


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"]
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from JSON string or list."""
        if isinstance(v, str):
            import json
            return json.loads(v)
        return v


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    api: APISettings = Field(default_factory=APISettings)

    # Application info
    app_name: str = "Chatbot"
    app_version: str = "0.1.0"
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
