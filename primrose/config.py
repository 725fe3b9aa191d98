from __future__ import annotations

from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from primrose import __version__

log = logger.bind(module="config")

DEFAULT_CONTROL_PLANE_URL = "https://api.pinecone.io"
DEFAULT_API_VERSION = "2025-01"


class Settings(BaseSettings):
    """Centralised client configuration.

    Values are read from the environment (or a local `.env` file). The API key
    is only consulted by local tooling; request handling always receives
    credentials explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    control_plane_url: str = Field(default=DEFAULT_CONTROL_PLANE_URL, alias="PINECONE_CONTROL_PLANE_URL")
    api_version: str = Field(default=DEFAULT_API_VERSION, alias="PINECONE_API_VERSION")
    api_key: SecretStr | None = Field(default=None, alias="PINECONE_API_KEY")

    timeout_seconds: float = Field(default=30.0, alias="PINECONE_TIMEOUT_SECONDS")
    follow_redirects: bool = Field(default=True, alias="PINECONE_FOLLOW_REDIRECTS")
    user_agent: str = Field(default=f"primrose/{__version__}", alias="PINECONE_USER_AGENT")

    @field_validator("control_plane_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        cleaned = (value or "").strip().rstrip("/")
        if not cleaned:
            raise ValueError("PINECONE_CONTROL_PLANE_URL must be non-empty.")
        return cleaned

    @field_validator("api_version")
    @classmethod
    def _require_api_version(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("PINECONE_API_VERSION must be non-empty.")
        return cleaned

    def export_safe(self) -> dict[str, Any]:
        """Return non-sensitive settings for debugging/logging."""
        return {
            "control_plane_url": self.control_plane_url,
            "api_version": self.api_version,
            "api_key_configured": self.api_key is not None,
            "timeout_seconds": self.timeout_seconds,
            "follow_redirects": self.follow_redirects,
            "user_agent": self.user_agent,
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""
    settings = Settings()
    log.info("Settings initialised: {}", settings.export_safe())
    return settings


__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_CONTROL_PLANE_URL",
    "Settings",
    "get_settings",
]
