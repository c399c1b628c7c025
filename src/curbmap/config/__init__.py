"""Configuration management for curbmap.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- PartitionConfig: Rounding precision and edit defaults
- GeometryConfig: Earth model and geodesic tolerances
- LoggingConfig: Logging settings
- CurbMapSettings: Main application settings
"""

from curbmap.config.settings import (
    CurbMapSettings,
    GeometryConfig,
    LoggingConfig,
    PartitionConfig,
    get_default_settings,
)

__all__ = [
    "CurbMapSettings",
    "GeometryConfig",
    "LoggingConfig",
    "PartitionConfig",
    "get_default_settings",
]
