"""
Converter configuration using Pydantic Settings.

Values are read from ``FORMULA_CONVERTER_*`` environment variables (or a
``.env`` file).  The defaults reproduce Google Sheets' own rendering of
errors and the markup expected by existing consumers.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConverterSettings(BaseSettings):
    """Settings for a formula conversion."""

    model_config = SettingsConfigDict(
        env_prefix="FORMULA_CONVERTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Written in place of a formula that failed to evaluate
    error_marker: str = "#ERROR!"

    # Inline style of generated <img> tags
    image_style: str = "max-width:100%"

    # Plain values and function results starting with this are linkified
    url_prefix: str = "http"

    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> ConverterSettings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure the environment is read only once.
    """
    return ConverterSettings()


def configure_logging(settings: Optional[ConverterSettings] = None) -> None:
    """Apply ``settings.log_level`` to the package logger.

    The library never installs handlers; this only sets the level of the
    ``formula_converter`` logger for host applications that want one knob.
    """
    settings = settings or get_settings()
    logging.getLogger("formula_converter").setLevel(settings.log_level.upper())
