"""ABOUTME: Configuration logic and path settings for the project.
ABOUTME: Provides the PokeAPI base URL, HTTP timeout, and cache/config paths."""

from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from letsgodex import __version__


def _get_project_root() -> Path:
    """Find project root by looking for pyproject.toml."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Contains settings for this project.

    Every field can be overridden with a ``LETSGODEX_`` prefixed environment variable.
    """

    model_config = SettingsConfigDict(env_prefix="LETSGODEX_")

    VERSION: str = __version__
    """Project version."""

    PROJECT_ROOT: Path = _get_project_root()
    """Root directory of the project."""

    API_BASE_URL: str = "https://pokeapi.co/api/v2"
    """Base URL of the PokeAPI REST endpoints (no trailing slash)."""

    HTTP_TIMEOUT: float = 30.0
    """Timeout in seconds for a single PokeAPI request."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def data_dir(self) -> Path:
        """Base data directory."""
        return self.PROJECT_ROOT / "data"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cache_dir(self) -> Path:
        """Directory holding cached PokeAPI JSON responses."""
        return self.data_dir / "cache" / "pokeapi"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def configs_dir(self) -> Path:
        """Directory containing configuration files."""
        return self.PROJECT_ROOT / "configs"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dex_config_path(self) -> Path:
        """Path to the dex.yml regional dex configuration."""
        return self.configs_dir / "dex.yml"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def logging_config_path(self) -> Path:
        """Path to the logging.yml configuration."""
        return self.configs_dir / "logging.yml"


settings = Settings()
