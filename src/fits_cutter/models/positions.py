"""
Position and window models for FITS cutouts.

- SkyPosition: named sky coordinate the cutout is centred on
- PixelWindow: integer pixel region to extract
- Rejected: marker returned when a position falls off the image

Example:
    >>> from fits_cutter.models import SkyPosition
    >>>
    >>> pos = SkyPosition(name="src1", ra=218.0, dec=34.5)
    >>> print(f"{pos.name}: {pos.ra}, {pos.dec}")
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class SkyPosition(BaseModel):
    """A named sky coordinate in degrees.

    Attributes:
        name: Source name, also used as the output file stem in batch mode
        ra: Right ascension in degrees
        dec: Declination in degrees
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="output", description="Source name")
    ra: float = Field(default=0.0, allow_inf_nan=False, description="Right ascension (deg)")
    dec: float = Field(
        default=0.0, ge=-90.0, le=90.0, allow_inf_nan=False, description="Declination (deg)"
    )


@dataclass(frozen=True)
class PixelWindow:
    """Square pixel region to extract from the source image.

    Ranges are 0-based and half-open. ``row_range`` runs along FITS axis 1
    (NAXIS1, the fastest-varying axis) and ``col_range`` along axis 2.

    Attributes:
        row_range: Pixel indices along axis 1
        col_range: Pixel indices along axis 2
        imsize: Side length of the window in pixels
        x_pix: Rounded centre pixel along axis 1
        y_pix: Rounded centre pixel along axis 2
    """

    row_range: range
    col_range: range
    imsize: int
    x_pix: int
    y_pix: int

    @property
    def shape(self) -> tuple[int, int]:
        """Numpy shape of the extracted region (axis 2, axis 1)."""
        return (len(self.col_range), len(self.row_range))

    def fits_within(self, naxis1: int, naxis2: int) -> bool:
        """True if the window lies entirely inside an image of this size."""
        return (
            self.row_range.start >= 0
            and self.col_range.start >= 0
            and self.row_range.stop <= naxis1
            and self.col_range.stop <= naxis2
        )


@dataclass(frozen=True)
class Rejected:
    """A position whose centre pixel is outside the image."""

    name: str
    x_pix: int
    y_pix: int
    reason: str = "completely outside image"

    @property
    def message(self) -> str:
        return f"Source {self.name} {self.reason}, skipping!"
