"""
Configuration Management for EAZZY

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Missing Supabase credentials are NOT an error: the app starts in a
degraded, local-only mode and says so once.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PLACEHOLDER_MARKER = "placeholder"


class SupabaseSettings(BaseSettings):
    """Supabase (auth + database) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUPABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    url: str = Field(
        default="",
        description="Supabase project URL"
    )
    anon_key: str = Field(
        default="",
        description="Supabase anonymous (public) API key"
    )

    # Table names
    transactions_table: str = Field(
        default="transactions",
        description="Table holding transaction records"
    )
    users_table: str = Field(
        default="users",
        description="Table holding user profiles"
    )

    @property
    def is_configured(self) -> bool:
        """Both credentials present and neither left as a template placeholder."""
        if not self.url or not self.anon_key:
            return False
        return (
            PLACEHOLDER_MARKER not in self.url
            and PLACEHOLDER_MARKER not in self.anon_key
        )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    name: str = Field(
        default="eazzy",
        min_length=1,
        description="Application name, used in export filenames"
    )
    environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )

    # Local fallback store
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the local fallback store"
    )
    local_store_slot: str = Field(
        default="eazzy_transactions",
        min_length=1,
        description="Name of the local fallback slot"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any casing of the level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def local_store_path(self) -> Path:
        """Full path of the local fallback slot."""
        return self.data_dir / f"{self.local_store_slot}.json"


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def supabase(self) -> SupabaseSettings:
        return SupabaseSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries describing failures.
    """
    results = {}

    settings = get_settings()

    try:
        supabase = settings.supabase
        results["supabase"] = supabase.is_configured
        if not supabase.is_configured:
            results["supabase_error"] = "SUPABASE_URL / SUPABASE_ANON_KEY not set"
    except Exception as e:
        results["supabase"] = False
        results["supabase_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
