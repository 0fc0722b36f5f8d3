"""
Configuration management for FITS Cutter.

Configuration hierarchy:
1. Default values (built-in)
2. config/default.toml (project defaults)
3. config/local.toml (user overrides, gitignored)
4. Environment variables (FITSCUT_* prefix)
5. Command-line arguments

Example:
    >>> from fits_cutter.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(f"Workers: {settings.cutout.workers}")

Configuration files use TOML format. See config/default.toml for all options.
"""

from fits_cutter.config.settings import (
    CutoutSettings,
    LoggingSettings,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "CutoutSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "load_settings",
]
