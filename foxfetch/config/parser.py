"""YAML configuration parser for foxfetch.

This module provides parsing and validation for foxfetch.yaml configuration files.

Example foxfetch.yaml:
    cache_dir: ~/.cache/firefox-downloads
    force_download: false
    output_env: true
    webdriver:
      base_url: http://localhost:9090
      preferences_file: config/firefox-prefs.yaml
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from foxfetch.core.exceptions import FoxfetchError

DEFAULT_CONFIG_NAME = "foxfetch.yaml"


class ConfigError(FoxfetchError):
    """Configuration parsing or validation error."""

    pass


@dataclass
class WebDriverConfig:
    """Settings for FirefoxDriver."""

    base_url: str = "http://localhost:9090"
    preferences_file: Optional[Path] = None


@dataclass
class FoxfetchConfig:
    """Complete foxfetch configuration."""

    cache_dir: Optional[Path] = None
    force_download: bool = False
    output_env: bool = False
    webdriver: WebDriverConfig = field(default_factory=WebDriverConfig)


def parse_config(config_path: Path) -> FoxfetchConfig:
    """
    Parse foxfetch.yaml configuration file.

    Relative paths in the file are resolved against the file's directory.

    Args:
        config_path: Path to foxfetch.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return FoxfetchConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data, config_path.parent)


def load_config(config_path: Optional[Path] = None) -> FoxfetchConfig:
    """
    Load configuration from config_path, or ./foxfetch.yaml if it exists.

    Returns defaults when no file is given and none is found.
    """
    if config_path is None:
        default = Path.cwd() / DEFAULT_CONFIG_NAME
        if not default.exists():
            return FoxfetchConfig()
        config_path = default
    return parse_config(config_path)


def _parse_and_validate(data: dict, base_dir: Path) -> FoxfetchConfig:
    """Parse and validate configuration data."""
    unknown = set(data) - {"cache_dir", "force_download", "output_env", "webdriver"}
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    return FoxfetchConfig(
        cache_dir=_parse_path(data.get("cache_dir"), "cache_dir", base_dir),
        force_download=_parse_bool(data.get("force_download", False), "force_download"),
        output_env=_parse_bool(data.get("output_env", False), "output_env"),
        webdriver=_parse_webdriver(data.get("webdriver") or {}, base_dir),
    )


def _parse_webdriver(data: dict, base_dir: Path) -> WebDriverConfig:
    """Parse webdriver section."""
    if not isinstance(data, dict):
        raise ConfigError("webdriver must be a mapping")

    base_url = data.get("base_url", WebDriverConfig.base_url)
    if not isinstance(base_url, str):
        raise ConfigError("webdriver.base_url must be a string")

    return WebDriverConfig(
        base_url=base_url,
        preferences_file=_parse_path(
            data.get("preferences_file"), "webdriver.preferences_file", base_dir
        ),
    )


def _parse_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false")
    return value


def _parse_path(value, name: str, base_dir: Path) -> Optional[Path]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a path string")
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path
