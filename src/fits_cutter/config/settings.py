"""
Configuration settings for FITS Cutter.

This module handles loading and validating configuration from TOML files
and environment variables.

Configuration hierarchy (later overrides earlier):
1. Default values (built-in)
2. config/default.toml
3. config/local.toml (gitignored)
4. $FITSCUT_CONFIG_PATH
5. Environment variables (FITSCUT_* prefix)
6. Command-line arguments

Example:
    >>> from fits_cutter.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(f"Workers: {settings.cutout.workers}")
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "FITSCUT_"


class CutoutSettings(BaseModel):
    """Cutout run settings."""

    model_config = ConfigDict(extra="ignore")

    workers: int = Field(default=4, ge=1, description="Worker threads for position tables")
    overwrite: bool = Field(default=False, description="Replace existing cutout files")
    output_dir: Path | None = Field(
        default=None,
        description="Directory for cutout files (None = current directory)",
    )


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="console", description="Output format")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)


class Settings(BaseModel):
    """Main settings container."""

    model_config = ConfigDict(extra="ignore")

    cutout: CutoutSettings = Field(default_factory=CutoutSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Returns:
        List of config file paths (in order of priority)
    """
    files = []

    cwd = Path.cwd()
    for name in ["config/default.toml", "config/local.toml"]:
        path = cwd / name
        if path.exists():
            files.append(path)

    env_config = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH")
    if env_config:
        path = Path(env_config)
        if path.exists():
            files.append(path)

    return files


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    FITSCUT_<SECTION>_<KEY> sets ``<section>.<key>``, e.g.
    FITSCUT_CUTOUT_WORKERS -> cutout.workers. Values are passed as strings;
    pydantic coerces them on validation.

    Args:
        config: Configuration dictionary

    Returns:
        Modified configuration
    """
    sections = Settings.model_fields

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        config_key = key[len(ENV_PREFIX) :].lower()
        section, _, option = config_key.partition("_")
        if section not in sections or not option:
            continue

        section_model = sections[section].annotation
        if option not in getattr(section_model, "model_fields", {}):
            continue

        current = config.setdefault(section, {})
        if isinstance(current, dict):
            current[option] = value

    return config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from configuration files.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Settings instance
    """
    config: dict[str, Any] = {}

    if config_path:
        files = [Path(config_path)]
    else:
        files = _find_config_files()

    for path in files:
        config = _merge_dicts(config, _load_toml(path))

    config = _apply_env_overrides(config)

    return Settings(**config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance (cached after first call)
    """
    return load_settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache).

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
