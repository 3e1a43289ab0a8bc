from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.constants import DEFAULT_SEARCH_THRESHOLD

# Content shipped with the package
BUILTIN_CONTENT_DIR = Path(__file__).parent / "content"


class Settings(BaseSettings):
    # Content location (defaults to the packaged content)
    BETTERSPECS_CONTENT_DIR: Optional[Path] = None

    # Search tuning: 0 accepts exact matches only, 1 accepts anything
    BETTERSPECS_SEARCH_THRESHOLD: float = DEFAULT_SEARCH_THRESHOLD

    # Logging
    BETTERSPECS_LOG_LEVEL: str = "WARNING"

    # Loads from .env file automatically
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def content_dir(self) -> Path:
        return self.BETTERSPECS_CONTENT_DIR or BUILTIN_CONTENT_DIR


# Private singleton instance
_settings = None


def get_settings() -> Settings:
    """
    Get or create the settings singleton.

    Raises:
        pydantic.ValidationError: If environment variables hold invalid values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
