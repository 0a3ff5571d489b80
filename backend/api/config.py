"""
API configuration using Pydantic Settings.

Loads server and auth configuration from TRADEDESK_* environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """API configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TRADEDESK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8080"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase Auth
    supabase_jwt_secret: str = ""
    jwt_audience: str = "authenticated"


@lru_cache
def get_settings() -> APISettings:
    """Get cached settings instance."""
    return APISettings()
