"""
Registry settings
- Unit database location
- Alias / display-symbol override files
- Log level

Every path defaults to the data bundled with the package. Values can be
overridden through ``UOMREGISTRY_*`` environment variables.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="UOMREGISTRY_")

    UNITS_FILE: Optional[Path] = Field(
        default=None,
        description="Energistics unit dictionary XML; bundled dictionary when unset",
    )

    ALIASES_FILE: Optional[Path] = Field(
        default=None,
        description="key=value file of unit symbol aliases; bundled file when unset",
    )

    DISPLAY_SYMBOLS_FILE: Optional[Path] = Field(
        default=None,
        description="key=value file of display symbol overrides; bundled file when unset",
    )

    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Level of the 'uomregistry' logger",
    )


@lru_cache(maxsize=1)
def get_settings() -> RegistrySettings:
    return RegistrySettings()


def configure_logging(settings: Optional[RegistrySettings] = None) -> None:
    """Apply the configured level to the package logger (handlers are left to the application)."""
    settings = settings or get_settings()
    logging.getLogger("uomregistry").setLevel(settings.LOG_LEVEL.upper())


__all__ = ["RegistrySettings", "get_settings", "configure_logging"]
