"""Runtime configuration loaded from ``VIDLINKS_*`` environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vidlinks.core.enrichment import DEFAULT_POOL_SIZE
from vidlinks.core.registry import DEFAULT_STORAGE_KEY


class Settings(BaseSettings):
    """Application settings.

    Every field can be overridden with an environment variable, e.g.
    ``VIDLINKS_DATA_DIR=/tmp/links`` or ``VIDLINKS_LOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(env_prefix="VIDLINKS_", extra="ignore")

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".vidlinks")
    storage_key: str = DEFAULT_STORAGE_KEY
    enrichment_workers: int = Field(DEFAULT_POOL_SIZE, ge=1)
    log_level: str = "WARNING"
    log_file: Path | None = None

    @property
    def store_file(self) -> Path:
        return self.data_dir / "network_links.json"

    @property
    def thumbnails_dir(self) -> Path:
        return self.data_dir / "video_thumbnails"

    @property
    def library_dir(self) -> Path:
        return self.data_dir / "media_library"


def get_settings(**overrides: object) -> Settings:
    """Build settings from the environment, applying explicit *overrides*."""
    return Settings(**overrides)  # type: ignore[arg-type]
