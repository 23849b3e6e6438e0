"""
Configuration management for foxfetch.
"""

from .parser import (
    ConfigError,
    FoxfetchConfig,
    WebDriverConfig,
    load_config,
    parse_config,
)

__all__ = [
    "ConfigError",
    "FoxfetchConfig",
    "WebDriverConfig",
    "load_config",
    "parse_config",
]
