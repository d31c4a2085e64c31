"""Configuration management for seamcraft.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Curve sampling and hit-testing settings
- OffsetConfig: Seam allowance offsetting settings
- LoggingConfig: Logging settings
- SeamcraftSettings: Main application settings
"""

from seamcraft.config.settings import (
    GeometryConfig,
    LoggingConfig,
    OffsetConfig,
    SeamcraftSettings,
    get_default_settings,
)

__all__ = [
    "GeometryConfig",
    "LoggingConfig",
    "OffsetConfig",
    "SeamcraftSettings",
    "get_default_settings",
]
