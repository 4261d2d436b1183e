"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Password reset settings
    code_ttl_seconds: int = 600  # Verification code validity window, 0 disables expiry
    max_code_attempts: int = 0  # Failed code checks before lockout, 0 means unlimited
    min_password_length: int = 8

    # Security settings
    bcrypt_cost: int = 10  # bcrypt work factor

    # Optional privileged account seeded at startup
    owner_name: str | None = None
    owner_email: str | None = None
    owner_password: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
