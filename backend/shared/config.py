"""
Centralized configuration for the Majji storefront backend.

All settings are loaded from environment variables with sensible defaults.
Provider-specific settings are namespaced (e.g., SUPABASE_*).
"""

from functools import lru_cache
from typing import Any, Literal
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
    app_name: str = "Majji API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"
    auth_callback_path: str = "/auth/callback"

    # Identity
    identity_backend: Literal["supabase", "memory"] = "supabase"
    social_providers: list[str] = ["google"]

    # Demo accounts, as a JSON list of provider user records
    demo_accounts: list[dict[str, Any]] = []

    @property
    def auth_callback_url(self) -> str:
        """Absolute URL the identity provider redirects back to."""
        return f"{self.frontend_url.rstrip('/')}{self.auth_callback_path}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
