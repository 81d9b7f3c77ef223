"""Configuration management for routerpath.

This module provides configuration management using Pydantic models.
Configuration can be provided via a job file, CLI arguments or defaults.

Key classes:
- CutProperties: Bit and feed settings for one operation
- TabProperties: Tab (bridge) size settings
- GeometryConfig: Numeric tolerances
- GCodeConfig: G-code output settings
- LoggingConfig: Logging settings
- RouterpathSettings: Main application settings
"""

from routerpath.config.settings import (
    CutProperties,
    GCodeConfig,
    GeometryConfig,
    LoggingConfig,
    RouterpathSettings,
    TabProperties,
    Units,
    get_default_settings,
)

__all__ = [
    "CutProperties",
    "GCodeConfig",
    "GeometryConfig",
    "LoggingConfig",
    "RouterpathSettings",
    "TabProperties",
    "Units",
    "get_default_settings",
]
