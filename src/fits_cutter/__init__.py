"""
FITS Cutter

Cut square sub-images ("cutouts") centred on sky coordinates out of a FITS
image, writing each as a new FITS file with a recentred WCS header.

Features:
- Sky-to-pixel planning with edge clamping for positions near the border
- Minimal WCS header for each cutout (CRVAL/CRPIX recentred)
- 2-D images and cubes with degenerate third/fourth axes
- Batch mode over a ``name, ra, dec`` CSV with per-position error reporting

Example:
    >>> from fits_cutter import CutoutRunner, SkyPosition
    >>>
    >>> runner = CutoutRunner("field.fits", size=0.04)
    >>> result = runner.run_one(SkyPosition(name="src1", ra=218.0, dec=34.5))
    >>> print(result.status, result.output_path)

For more information, run:
    $ fits-cutter --help
"""

__version__ = "0.1.0"
__author__ = "Frits Sweijen"

from fits_cutter.config.settings import Settings, get_settings
from fits_cutter.cutouts import SourceImage, make_cutout, plan_window
from fits_cutter.exceptions import CutoutError, PixelScaleError
from fits_cutter.models import CutoutResult, CutoutStatus, PixelWindow, Rejected, SkyPosition
from fits_cutter.processing import BatchResult, CutoutRunner

__all__ = [
    "BatchResult",
    "CutoutError",
    "CutoutResult",
    "CutoutRunner",
    "CutoutStatus",
    "PixelScaleError",
    "PixelWindow",
    "Rejected",
    "Settings",
    "SkyPosition",
    "SourceImage",
    "__author__",
    "__version__",
    "get_settings",
    "make_cutout",
    "plan_window",
]
