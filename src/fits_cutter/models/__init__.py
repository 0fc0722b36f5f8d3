"""
Data models for FITS Cutter.

This module provides:
- SkyPosition: Named sky coordinate (Pydantic, immutable)
- PixelWindow: Pixel region derived for one cutout
- Rejected: Marker for positions outside the image
- CutoutResult / CutoutStatus: Per-position outcome
"""

from fits_cutter.models.positions import PixelWindow, Rejected, SkyPosition
from fits_cutter.models.results import CutoutResult, CutoutStatus

__all__ = [
    "CutoutResult",
    "CutoutStatus",
    "PixelWindow",
    "Rejected",
    "SkyPosition",
]
