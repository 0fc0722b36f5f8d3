"""
Utility functions for FITS Cutter.

Logging:
- setup_logging(): Configure structured logging with structlog
- get_logger(name): Get a logger instance
"""

from fits_cutter.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
