"""
ygg-portal Configuration

All portal settings using pydantic-settings with environment variable support.
Values can be overridden through the process environment or a ``.env`` file
at the project root.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env relative to the project root (one level up from the package)
_THIS_DIR = Path(__file__).resolve().parent  # ygg_portal/
_PROJECT_ROOT = _THIS_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Portal settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Identity service ─────────────────────────────────────────────────
    AUTH_SERVER_URL: str = "http://localhost:8080"
    AUTH_API_PREFIX: str = "/authserver"
    REQUEST_TIMEOUT_SECS: float = 30

    # ── Notifications ────────────────────────────────────────────────────
    # The original page echoed the fresh accessToken back to the user.
    SHOW_TOKEN_IN_NOTIFICATION: bool = True

    # ── UI / logging ─────────────────────────────────────────────────────
    PAGE_TITLE: str = "简陋注册页"
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    # ── Derived properties ───────────────────────────────────────────────
    @property
    def auth_base_url(self) -> str:
        """Base URL for the Yggdrasil ``authserver`` endpoints."""
        base = self.AUTH_SERVER_URL.rstrip("/")
        prefix = self.AUTH_API_PREFIX.strip("/")
        return f"{base}/{prefix}" if prefix else base


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance (read once, reused everywhere)."""
    return Settings()
