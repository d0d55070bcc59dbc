"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. RSVP_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. RSVP_ENV_FILE env var (full path, or relative to the project root)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("RSVP_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security. Optional here so that a missing secret surfaces as a
    # ConfigurationError from the token service rather than a ValidationError.
    rsvp_token_secret: SecretStr | None = None

    # Tokens
    rsvp_token_lifetime_days: int = 120

    # Links
    rsvp_base_url: str = "http://localhost:3000/rsvp"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("rsvp_token_lifetime_days")
    @classmethod
    def _validate_lifetime(cls, v: int) -> int:
        if v <= 0:
            msg = "rsvp_token_lifetime_days must be positive"
            raise ValueError(msg)
        return v

    @property
    def token_secret(self) -> str | None:
        """Plain token secret, or None when unset."""
        if self.rsvp_token_secret is None:
            return None
        return self.rsvp_token_secret.get_secret_value()

    @property
    def default_token_lifetime(self) -> timedelta:
        """Lifetime applied to tokens issued without an explicit expiry."""
        return timedelta(days=self.rsvp_token_lifetime_days)


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
