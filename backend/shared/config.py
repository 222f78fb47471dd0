"""
Centralized configuration for the Notta backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., RAZORPAY_*, SUPABASE_*, SMTP_*).
"""

from functools import lru_cache
from typing import Optional
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
    app_name: str = "Notta API"
    app_version: str = "0.1.0"
    environment: str = "development"  # development | production
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 7

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_timeout_seconds: int = 10
    database_url: str = ""  # direct Postgres URL, used by run_migrations.py

    # Razorpay
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_webhook_secret: str = ""
    razorpay_api_url: str = "https://api.razorpay.com/v1"

    # Outgoing mail (password reset)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from: str = "Notta <no-reply@notta.in>"

    # Frontend URL (used in emailed links)
    app_url: str = "http://localhost:3000"

    # Lifetimes
    anonymous_default_expiry_hours: int = 24
    password_reset_ttl_minutes: int = 60
    session_ttl_hours: int = 24
    file_versions_kept: int = 5

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production mode (secure cookies)."""
        return self.environment.lower() == "production"

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host)

    def razorpay_credentials(self) -> Optional[tuple[str, str]]:
        """Return (key_id, key_secret) if both are configured."""
        if self.razorpay_key_id and self.razorpay_key_secret:
            return self.razorpay_key_id, self.razorpay_key_secret
        return None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
