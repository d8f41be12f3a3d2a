"""ABOUTME: Configuration loaders for the regional dex the app is scoped to.
ABOUTME: Handles loading and parsing of dex.yml configuration."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from letsgodex.settings import settings

logger = logging.getLogger(__name__)


class DexConfig(BaseModel):
    """Configuration for the regional subset of the national dex.

    Defaults match Let's Go Pikachu / Eevee (the original 151).
    """

    max_pokemon: int = Field(default=151, gt=0)
    version: str = "lets-go-pikachu"
    version_group: str = "lets-go-pikachu-lets-go-eevee"
    max_team_size: int = Field(default=6, gt=0)
    page_size: int = Field(default=20, gt=0)
    storage_key: str = "letsgodex_team"

    def clamp_limit(self, limit: int, offset: int) -> int:
        """Clamp a list page size so the page never runs past the regional maximum.

        Args:
            limit: Requested number of entries.
            offset: Index of the first entry.

        Returns:
            Number of entries to request, never negative.
        """
        return max(0, min(limit, self.max_pokemon - offset))


def load_dex_config(config_path: Path | None = None) -> DexConfig:
    """Load regional dex configuration from YAML file.

    Args:
        config_path: Path to the config file. Defaults to settings.dex_config_path.

    Returns:
        Parsed DexConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is invalid.
    """
    if config_path is None:
        config_path = settings.dex_config_path

    if not config_path.exists():
        raise FileNotFoundError(f"Dex config not found: {config_path}")

    with config_path.open() as f:
        raw_config = yaml.safe_load(f) or {}

    return DexConfig.model_validate(raw_config)


@lru_cache(maxsize=1)
def get_dex_config() -> DexConfig:
    """Return the project dex configuration, falling back to defaults without a dex.yml."""
    if not settings.dex_config_path.exists():
        logger.debug("No dex config at %s, using defaults", settings.dex_config_path)
        return DexConfig()
    return load_dex_config(settings.dex_config_path)
