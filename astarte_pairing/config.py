"""Central configuration for the astarte pairing client."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .version import __version__

ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_ENV_FILE = ROOT_DIR / ".env"


class Settings(BaseSettings):
    """Environment-driven settings, read from ``ASTARTE_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASTARTE_",
        env_file=str(DEFAULT_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    pairing_url: str = Field(..., description="Base URL of the Pairing API, e.g. https://api.astarte.example/pairing")
    request_timeout: float = Field(15.0, description="Per-request timeout in seconds")
    user_agent: str = Field(f"astarte-pairing/{__version__}", description="User-Agent header sent with every call")

    log_level: str = Field("INFO", description="Logging level for the client")


@lru_cache()
def get_settings(override_env_file: Optional[Path] = None) -> Settings:
    """Cached Settings instance; accepts optional env override for tests."""

    if override_env_file:
        return Settings(_env_file=str(override_env_file))
    return Settings()
