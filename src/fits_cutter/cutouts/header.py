"""
Output header derivation for cutouts.

The cutout header carries only the WCS keywords needed to place the new
image on the sky. Reference value and pixel are moved to the centre of the
extracted window; everything else is copied from the source when present.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from astropy.io import fits

from ..models.positions import PixelWindow
from .image import SourceImage
from .planner import unproject

# Copied only if the source has them; absent and zero are distinct.
OPTIONAL_KEYS = ("RADESYS", "LONPOLE", "LATPOLE")
CUBE_AXIS_KEYS = ("CTYPE3", "CTYPE4")


@dataclass
class OutputHeader:
    """WCS keywords for one cutout, in the order they are written."""

    imsize: int
    cards: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.cards[key]

    def __contains__(self, key: str) -> bool:
        return key in self.cards

    def to_fits_header(self) -> fits.Header:
        """Render as an astropy Header (shape keywords are added on write)."""
        header = fits.Header()
        for key, value in self.cards.items():
            header[key] = value
        return header


def derive(image: SourceImage, window: PixelWindow) -> OutputHeader:
    """Derive the cutout header from the source image and final window.

    Args:
        image: Source image (header and WCS are only read)
        window: Final pixel window

    Returns:
        OutputHeader with CRVAL/CRPIX recentred on the window
    """
    ra, dec = unproject(window.x_pix, window.y_pix, image.wcs)
    crpix = math.ceil(window.imsize / 2)

    out = OutputHeader(imsize=window.imsize)
    out.cards["CRVAL1"] = ra + abs(image.cdelt1) / 2.0
    out.cards["CRVAL2"] = dec
    out.cards["CRPIX1"] = crpix
    out.cards["CRPIX2"] = crpix
    out.cards["CDELT1"] = image.cdelt1
    out.cards["CDELT2"] = image.cdelt2

    for key in ("CTYPE1", "CTYPE2", *CUBE_AXIS_KEYS, *OPTIONAL_KEYS):
        value = image.read_key(key)
        if value is not None:
            out.cards[key] = value

    return out
