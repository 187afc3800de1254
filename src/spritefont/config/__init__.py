"""Configuration management for spritefont.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ImportConfig: Source font and character selection
- LayoutConfig: Spacing adjustments
- OutputConfig: Atlas format and output paths
- LoggingConfig: Logging settings
- SpriteFontSettings: Main application settings
"""

from spritefont.config.settings import (
    FeatureLevel,
    FontStyle,
    ImportConfig,
    LayoutConfig,
    LoggingConfig,
    OutputConfig,
    SpriteFontSettings,
    TextureFormat,
    get_default_settings,
)

__all__ = [
    "FeatureLevel",
    "FontStyle",
    "ImportConfig",
    "LayoutConfig",
    "LoggingConfig",
    "OutputConfig",
    "SpriteFontSettings",
    "TextureFormat",
    "get_default_settings",
]
