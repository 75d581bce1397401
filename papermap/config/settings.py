from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from papermap.models.scoring import BridgeWeights


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        env_prefix="PAPERMAP_"
    )


    # ------------------------------------------------------------------
    # Core paths
    # ------------------------------------------------------------------
    DATA_DIR: Path = Field(
        default=Path("data"),
        description="Base data directory for the corpus file and saved filters.",
    )

    CORPUS_FILENAME: str = Field(
        default="corpus.json",
        description="Corpus file name inside DATA_DIR, used when no corpus path is given.",
    )

    STORE_FILENAME: str = Field(
        default="filters.json",
        description="JSON key-value document holding persisted filter settings.",
    )

    # ------------------------------------------------------------------
    # Filter persistence keys
    # ------------------------------------------------------------------
    FILTER_SETTINGS_KEY: str = Field(
        default="graph-filter-settings-v1",
        description="Store key of the filter configuration restored at start.",
    )

    PINNED_FILTER_SETTINGS_KEY: str = Field(
        default="graph-filter-settings-pinned-v1",
        description="Store key of the pinned snapshot, only loaded on request.",
    )

    # ------------------------------------------------------------------
    # Recommendation policy
    # ------------------------------------------------------------------
    bridge_limit: int = Field(
        default=5,
        ge=0,
        description="Default number of bridge recommendations returned.",
    )

    bridge_ignores_min_strength: bool = Field(
        default=False,
        description=(
            "If True, relationships below the active minimum strength may "
            "still act as bridging edges. Direct neighbors through such "
            "edges are then excluded as well."
        ),
    )

    bridge_weights: BridgeWeights = Field(
        default_factory=BridgeWeights,
        description="Scoring weights, e.g. PAPERMAP_BRIDGE_WEIGHTS__CATEGORY_MATCH=2.",
    )

    # ------------------------------------------------------------------
    # Web
    # ------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level for the web app.",
    )

    # ------------------------------------------------------------------
    # Convenience derived paths
    # ------------------------------------------------------------------
    @property
    def corpus_path(self) -> Path:
        return self.DATA_DIR / self.CORPUS_FILENAME

    @property
    def store_path(self) -> Path:
        return self.DATA_DIR / self.STORE_FILENAME


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Singleton-style accessor so we only construct Settings once and
    ensure the data directory exists on first access.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.DATA_DIR.mkdir(parents=True, exist_ok=True)

    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next access re-reads the environment."""
    global _settings
    _settings = None
