"""
Progression analytics settings, read from the environment or a .env file.

Every tunable (Supabase credentials, history limits, report windows, Sentry)
lives here. Use get_settings() for a cached, process-wide instance:

    settings = get_settings()
    settings.progression_history_limit

    # Tests: build an isolated instance that ignores .env
    settings = Settings(environment="test", _env_file=None)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for the command-line entry point",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Progression Analytics
    # -------------------------------------------------------------------------
    progression_history_limit: int = Field(
        default=150,
        ge=1,
        description="Most recent workout logs used when recomputing snapshots",
    )
    progression_snapshot_limit: int = Field(
        default=30,
        ge=1,
        description="Stored snapshots merged into the performance analytics report",
    )
    progression_targets_limit: int = Field(
        default=100,
        ge=1,
        description="Stored snapshots considered when picking next targets",
    )
    analytics_period_days: int = Field(
        default=14,
        ge=1,
        description="Adherence window (days) of the performance analytics report",
    )
    analytics_workout_window_days: int = Field(
        default=30,
        ge=1,
        description="Workout log window (days) used for fresh trend points",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one the logging module understands."""
        valid_levels = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if v.upper() not in valid_levels:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: {valid_levels}"
            )
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
