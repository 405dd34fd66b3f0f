"""Application settings via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with GSTATS_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="GSTATS_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Storage ---
    # Tokens and sessions may live in Redis; users, profiles and alliances are in-memory.
    store_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"

    # --- Sessions ---
    session_cookie_name: str = "gstats_session"
    session_max_age_seconds: int = 60 * 60 * 24 * 7  # 1 week
    session_cookie_secure: bool = False

    # --- Game gateway ---
    gateway_base_url: str = "https://5c7021242c10k1d2.tap4hub.com:10443"
    gateway_client_id: str = "k1d2:oap.1.0.0"
    gateway_secret: str = ""
    gateway_timeout_seconds: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
