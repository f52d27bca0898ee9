"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Timeline
    day_start_hour: int = 9
    default_activity_minutes: int = 120

    # Travel estimation
    default_travel_buffer_min: int = 30
    travel_km_per_minute: float = 0.5
    travel_overhead_min: int = 15

    # Sidebar drops
    suggestion_activity_minutes: int = 90

    # Day themes
    new_day_theme: str = "New Day"
    restored_day_theme: str = "Restored Day"

    # Suggestion source
    suggestions_base_url: str = "http://localhost:3001"
    suggestions_timeout_sec: float = 4.0

    # Persistence
    database_url: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
