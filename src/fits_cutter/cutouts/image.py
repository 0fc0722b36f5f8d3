"""
Read-only access to the source FITS image.

SourceImage wraps the primary HDU header and WCS of the image being cut.
Pixel data is never held in memory: every region read re-opens the file
memory-mapped, so workers can share one SourceImage without sharing a file
handle.
"""

from __future__ import annotations

import math
import warnings
from pathlib import Path
from typing import Any

import numpy as np
import structlog
from astropy.io import fits
from astropy.wcs import WCS, FITSFixedWarning

from ..exceptions import CutoutError, PixelScaleError
from ..models.positions import PixelWindow

logger = structlog.get_logger(__name__)


def _read_pixel_scale(header: fits.Header, key: str, path: Path) -> float:
    value = header.get(key)
    if value is None:
        raise PixelScaleError(key, str(path))
    try:
        scale = float(value)
    except (TypeError, ValueError) as e:
        raise PixelScaleError(key, str(path), reason=f"is not a number ({value!r})") from e
    if scale == 0.0 or not math.isfinite(scale):
        raise PixelScaleError(key, str(path))
    return scale


class SourceImage:
    """Primary image of a FITS file, opened for cutting.

    Attributes:
        path: Path to the FITS file
        header: Copy of the primary header
        naxis1: Image width (FITS axis 1)
        naxis2: Image height (FITS axis 2)
        cdelt1: Pixel scale along axis 1 (deg)
        cdelt2: Pixel scale along axis 2 (deg)
        wcs: Two-axis celestial WCS of the image

    Example:
        >>> image = SourceImage.open("field.fits")
        >>> fx, fy = image.wcs.all_world2pix(218.0, 34.5, 0)
        >>> print(image.naxis1, image.naxis2, image.cdelt1)
    """

    def __init__(self, path: str | Path, header: fits.Header):
        """Build from an already-read primary header.

        Args:
            path: File the header was read from
            header: Primary header

        Raises:
            PixelScaleError: CDELT1 or CDELT2 missing, zero or not a number
            CutoutError: Primary HDU is not at least two-dimensional, or
                has no usable celestial WCS
        """
        self.path = Path(path)
        self.header = header.copy()

        try:
            naxis = int(self.header.get("NAXIS", 0))
            if naxis < 2:
                raise CutoutError(
                    f"{self.path} has no 2-D image in its primary HDU (NAXIS={naxis})"
                )
            self.naxis1 = int(self.header["NAXIS1"])
            self.naxis2 = int(self.header["NAXIS2"])
        except (KeyError, TypeError, ValueError) as e:
            raise CutoutError(f"{self.path} has an invalid image shape: {e}") from e

        self.cdelt1 = _read_pixel_scale(self.header, "CDELT1", self.path)
        self.cdelt2 = _read_pixel_scale(self.header, "CDELT2", self.path)

        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", FITSFixedWarning)
                self.wcs = WCS(self.header, naxis=2)
        except Exception as e:
            raise CutoutError(f"{self.path} has no usable celestial WCS: {e}") from e

    @classmethod
    def open(cls, path: str | Path) -> SourceImage:
        """Read the primary header of ``path`` and validate it."""
        path = Path(path)
        with fits.open(path) as hdul:
            header = hdul[0].header.copy()

        image = cls(path, header)
        logger.debug(
            "source_image_opened",
            path=str(path),
            naxis=image.naxis,
            cdelt1=image.cdelt1,
            cdelt2=image.cdelt2,
        )
        return image

    @property
    def naxis(self) -> tuple[int, ...]:
        """Axis lengths in FITS order (NAXIS1 first)."""
        count = int(self.header.get("NAXIS", 0))
        return tuple(int(self.header[f"NAXIS{i}"]) for i in range(1, count + 1))

    def read_key(self, key: str) -> Any | None:
        """Read an optional header keyword.

        Returns:
            The value, or None if the keyword is absent or an empty string.
            A present value of 0 is returned as 0, not None.
        """
        value = self.header.get(key)
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def read_region(self, window: PixelWindow) -> np.ndarray:
        """Read the pixels covered by ``window``.

        Extra leading axes (frequency/Stokes planes of a cube) are read at
        plane 0.

        Returns:
            Array of shape (imsize, imsize)

        Raises:
            CutoutError: The window leaves the image or does not yield
                imsize**2 pixels
        """
        if not window.fits_within(self.naxis1, self.naxis2):
            raise CutoutError(
                f"Window {window.row_range} x {window.col_range} is outside "
                f"{self.path} ({self.naxis1}x{self.naxis2})"
            )

        extra_axes = len(self.naxis) - 2
        index = (0,) * extra_axes + (
            slice(window.col_range.start, window.col_range.stop),
            slice(window.row_range.start, window.row_range.stop),
        )

        with fits.open(self.path, memmap=True) as hdul:
            region = np.array(hdul[0].section[index])

        if region.size != window.imsize**2:
            raise CutoutError(
                f"Read {region.size} pixels from {self.path}, "
                f"expected {window.imsize}x{window.imsize}"
            )
        return region.reshape(window.imsize, window.imsize)

    def __repr__(self) -> str:
        return f"SourceImage({str(self.path)!r}, naxis={self.naxis})"
