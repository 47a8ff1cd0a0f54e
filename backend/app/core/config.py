"""
Configuration settings for the Trip Economics Backend.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Trip Economics Backend"
    api_version: str = "v1"
    debug: bool = False
    log_level: str = "INFO"

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///./trips.db"
    db_echo: bool = False

    # Trip defaults applied when neither the payload nor the vehicle provides a value
    default_daily_taxes_uah: float = 150.0

    # Header set by the upstream gateway after it has authenticated the caller
    user_id_header: str = "X-User-ID"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
