"""
FITS cutout extraction.

- SourceImage: read-only primary image with header, WCS and region reads
- project / unproject: sky <-> pixel through the image WCS
- plan_window: pixel window with edge clamping and parity correction
- derive: output WCS header for a planned window
- make_cutout: plan, derive, read and write one cutout

Example:
    >>> from fits_cutter.cutouts import SourceImage, make_cutout
    >>> from fits_cutter.models import SkyPosition
    >>>
    >>> image = SourceImage.open("field.fits")
    >>> result = make_cutout(image, SkyPosition(name="src1", ra=218.0, dec=34.5), 0.04, "src1.fits")
    >>> print(result.status, result.imsize)
"""

from fits_cutter.cutouts.header import OutputHeader, derive
from fits_cutter.cutouts.image import SourceImage
from fits_cutter.cutouts.planner import plan_window, project, unproject
from fits_cutter.cutouts.processor import make_cutout, output_path_for

__all__ = [
    "OutputHeader",
    "SourceImage",
    "derive",
    "make_cutout",
    "output_path_for",
    "plan_window",
    "project",
    "unproject",
]
