"""
Centralized configuration for the Tradedesk backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., ACCESS_*, SUPABASE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Tradedesk API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Supabase table names
    subscribers_table: str = "beehiiv_subscribers"
    admin_users_table: str = "admin_users"

    # Frontend URLs (for upgrade prompts)
    frontend_url: str = "http://localhost:5173"
    upgrade_path: str = "/upgrade"

    # Access policy
    # Single grace window for both checkout completion and magic-link login.
    access_grace_period_seconds: int = 30

    # Feature Flags
    enable_admin_override: bool = True
    enable_grace_period: bool = True


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
