"""
Cutout planning: from a sky position to the pixel window to extract.

The window is square, sized from the axis-1 pixel scale, centred on the
rounded pixel position and halved until it fits inside the image.

Example:
    >>> from fits_cutter.cutouts.planner import plan_window, project
    >>>
    >>> fx, fy = project(218.0, 34.5, image.wcs)
    >>> window = plan_window(fx, fy, image.naxis1, image.naxis2, image.cdelt1, 0.04)
    >>> if isinstance(window, Rejected):
    ...     print(window.message)
"""

from __future__ import annotations

import math

import numpy as np
import structlog
from astropy.wcs import WCS

from ..exceptions import CutoutError, PixelScaleError, ProjectionError
from ..models.positions import PixelWindow, Rejected

logger = structlog.get_logger(__name__)

# Smallest window the halving loop will shrink to.
MIN_HALVING_SIZE = 2


def project(ra: float, dec: float, wcs: WCS) -> tuple[float, float]:
    """Project a sky coordinate (deg) to 0-based fractional pixel coordinates.

    Raises:
        ProjectionError: The WCS returned a non-finite pixel position
    """
    try:
        fx, fy = wcs.all_world2pix(ra, dec, 0)
    except Exception as e:
        raise ProjectionError(f"Cannot project ({ra}, {dec}): {e}") from e

    fx, fy = float(fx), float(fy)
    if not (np.isfinite(fx) and np.isfinite(fy)):
        raise ProjectionError(f"Position ({ra}, {dec}) has no pixel position in this projection")
    return fx, fy


def unproject(x: float, y: float, wcs: WCS) -> tuple[float, float]:
    """Inverse of :func:`project`: 0-based pixel to sky coordinate (deg)."""
    try:
        ra, dec = wcs.all_pix2world(x, y, 0)
    except Exception as e:
        raise ProjectionError(f"Cannot unproject pixel ({x}, {y}): {e}") from e

    ra, dec = float(ra), float(dec)
    if not (np.isfinite(ra) and np.isfinite(dec)):
        raise ProjectionError(f"Pixel ({x}, {y}) has no sky position in this projection")
    return ra, dec


def round_pixel(value: float) -> int:
    """Round to the nearest pixel, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _centered(center: int, imsize: int) -> range:
    half = imsize // 2
    return range(center - half, center + half + 1)


def _exceeds(rng: range, naxis: int) -> bool:
    return rng.start < 0 or rng.stop > naxis


def plan_window(
    fx: float,
    fy: float,
    naxis1: int,
    naxis2: int,
    cdelt1: float,
    size: float,
    name: str = "",
) -> PixelWindow | Rejected:
    """Derive the pixel window for a cutout of ``size`` degrees.

    Args:
        fx: Fractional pixel position along axis 1 (0-based)
        fy: Fractional pixel position along axis 2 (0-based)
        naxis1: Image length along axis 1
        naxis2: Image length along axis 2
        cdelt1: Axis-1 pixel scale (deg); used for both axes
        size: Requested cutout width and height (deg)
        name: Source name, carried into a Rejected result

    Returns:
        PixelWindow inside the image, or Rejected if the centre pixel is
        off the image.

    Raises:
        PixelScaleError: cdelt1 is zero
        CutoutError: The centre is so close to the far edge that even the
            smallest window does not fit
    """
    if cdelt1 == 0.0:
        raise PixelScaleError("CDELT1")

    x_pix = round_pixel(fx)
    y_pix = round_pixel(fy)

    if not (0 <= x_pix < naxis1 and 0 <= y_pix < naxis2):
        return Rejected(name=name, x_pix=x_pix, y_pix=y_pix)

    imsize = max(1, math.ceil(size / abs(cdelt1)))
    requested = imsize

    rows = _centered(x_pix, imsize)
    cols = _centered(y_pix, imsize)

    while (_exceeds(rows, naxis1) or _exceeds(cols, naxis2)) and imsize > MIN_HALVING_SIZE:
        previous = imsize
        imsize //= 2
        assert 0 < imsize < previous
        rows = _centered(x_pix, imsize)
        cols = _centered(y_pix, imsize)

    if imsize != requested:
        logger.debug("window_resized", source=name, requested=requested, imsize=imsize)

    # Even sizes centre on an odd span; drop the low edge so exactly
    # imsize pixels are extracted and the centre pixel lands on ceil(imsize / 2).
    if len(rows) == imsize + 1 and len(cols) == imsize + 1:
        rows = range(rows.start + 1, rows.stop)
        cols = range(cols.start + 1, cols.stop)

    window = PixelWindow(row_range=rows, col_range=cols, imsize=imsize, x_pix=x_pix, y_pix=y_pix)
    if not window.fits_within(naxis1, naxis2):
        raise CutoutError(
            f"Source {name or '(unnamed)'} at pixel ({x_pix}, {y_pix}) is too close to the "
            f"image edge for a {imsize}-pixel window"
        )
    return window
