"""
Exceptions raised while planning and writing FITS cutouts.

- CutoutError: anything that prevents one cutout from being produced
- PixelScaleError: CDELT1/CDELT2 missing or zero, fatal for the whole run
- ProjectionError: the WCS could not map a position to pixels
- PositionTableError: the position table (or one of its rows) is unusable
"""

from __future__ import annotations


class CutoutError(Exception):
    """A single cutout could not be produced."""


class PixelScaleError(CutoutError):
    """The source image has no usable pixel scale.

    Attributes:
        key: Offending header keyword ("CDELT1" or "CDELT2")
        path: Source image path, if known
    """

    def __init__(self, key: str, path: str | None = None, reason: str = "is missing or zero"):
        self.key = key
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"{key} {reason}{where}. Please check the file.")


class ProjectionError(CutoutError):
    """Sky coordinate could not be projected through the image WCS."""


class PositionTableError(CutoutError):
    """Position table could not be read, or a row could not be parsed."""
