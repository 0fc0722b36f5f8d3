"""
Test fixtures for FITS Cutter.

This module provides:
- ImageFactory: Write synthetic FITS images (2-D, cubes) with a TAN WCS
- Scenario geometry constants for the 1000x1000 test field
"""

from tests.fixtures.images import (
    FIELD_CDELT,
    FIELD_DEC,
    FIELD_NAXIS,
    FIELD_RA,
    ImageFactory,
)

__all__ = [
    "FIELD_CDELT",
    "FIELD_DEC",
    "FIELD_NAXIS",
    "FIELD_RA",
    "ImageFactory",
]
