"""
Centralized settings for the pricing engine and its collaborators.

Values come from PRICER_* environment variables (PRICER_TAX_RATE,
PRICER_DISCOUNT_RATE, PRICER_CURRENCY, ...), with defaults for anything unset.
"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


class Settings(BaseSettings):
    """Application settings with sensible defaults."""

    model_config = SettingsConfigDict(env_prefix="PRICER_", extra="ignore")

    project_root: Path = Field(default_factory=get_project_root)

    # Rates applied to newly built quotes (percent)
    tax_rate: float = 0.0
    discount_rate: float = 0.0

    # Display
    currency: str = "$"

    # Output; defaults to <project_root>/exports
    export_dir: Optional[Path] = None

    log_level: str = "WARNING"

    # API server
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    @field_validator('tax_rate', 'discount_rate', mode='before')
    @classmethod
    def _rate_or_default(cls, value, info):
        default = cls.model_fields[info.field_name].default
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring PRICER_%s=%r: not a number, using %s",
                           info.field_name.upper(), value, default)
            return default

    @field_validator('log_level', mode='before')
    @classmethod
    def _upper_level(cls, value):
        return str(value).upper()

    def model_post_init(self, __context):
        if self.export_dir is None:
            self.export_dir = self.project_root / 'exports'

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment."""
        if project_root is None:
            return cls()
        return cls(project_root=project_root)


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
