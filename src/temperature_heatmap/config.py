"""
Application settings.

Values come from environment variables prefixed with ``HEATMAP_`` or from a
``.env`` file in the working directory, e.g.::

    HEATMAP_DATASET_URL=https://example.com/global-temperature.json
    HEATMAP_SITE_DIR=public
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI and flows."""

    model_config = SettingsConfigDict(
        env_prefix="HEATMAP_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "temperature-heatmap"
    app_env: str = "development"
    debug: bool = False

    dataset_url: str = (
        "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/"
        "master/global-temperature.json"
    )
    site_dir: Path = Path("site")
    api_port: int = Field(default=8000, ge=1, le=65535)
    http_timeout: float = Field(default=30, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
