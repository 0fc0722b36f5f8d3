"""
Single-position cutout processing.

Plans the window, derives the header, reads the region and writes the
cutout file. Errors are raised to the caller; the batch runner turns them
into per-position results.
"""

from __future__ import annotations

import time
from pathlib import Path

import numpy as np
import structlog
from astropy.io import fits

from ..models.positions import Rejected, SkyPosition
from ..models.results import CutoutResult, CutoutStatus
from .header import derive
from .image import SourceImage
from .planner import plan_window, project

logger = structlog.get_logger(__name__)


def output_path_for(name: str, output_dir: Path | None = None) -> Path:
    """Cutout file path for a source name: ``<output_dir>/<name>.fits``."""
    filename = f"{name}.fits"
    return output_dir / filename if output_dir else Path(filename)


def write_cutout(data: np.ndarray, header: fits.Header, path: Path, *, overwrite: bool = False) -> None:
    """Write a float32 primary HDU."""
    hdu = fits.PrimaryHDU(data=np.asarray(data, dtype=np.float32), header=header)
    hdu.writeto(path, overwrite=overwrite)


def make_cutout(
    image: SourceImage | str | Path,
    position: SkyPosition,
    size: float,
    outfile: str | Path,
    *,
    overwrite: bool = False,
) -> CutoutResult:
    """Cut ``size`` degrees around ``position`` out of ``image``.

    Args:
        image: Source image, or path to one
        position: Centre of the cutout
        size: Cutout width and height (deg)
        outfile: Output FITS path
        overwrite: Replace an existing output file

    Returns:
        CutoutResult with status WRITTEN, or SKIPPED if the position is
        outside the image (no file is written)

    Raises:
        PixelScaleError: Source has no usable pixel scale
        CutoutError: Projection or window failure
        OSError: Output could not be written (e.g. it already exists)
    """
    start_time = time.monotonic()
    if not isinstance(image, SourceImage):
        image = SourceImage.open(image)
    outfile = Path(outfile)

    fx, fy = project(position.ra, position.dec, image.wcs)
    window = plan_window(
        fx,
        fy,
        image.naxis1,
        image.naxis2,
        image.cdelt1,
        size,
        name=position.name,
    )

    if isinstance(window, Rejected):
        logger.info(
            "cutout_skipped",
            source=position.name,
            x_pix=window.x_pix,
            y_pix=window.y_pix,
        )
        return CutoutResult(
            name=position.name,
            status=CutoutStatus.SKIPPED,
            message=window.message,
            elapsed_seconds=time.monotonic() - start_time,
        )

    header = derive(image, window)
    data = image.read_region(window)

    if outfile.parent != Path("."):
        outfile.parent.mkdir(parents=True, exist_ok=True)
    write_cutout(data, header.to_fits_header(), outfile, overwrite=overwrite)

    logger.debug(
        "cutout_written",
        source=position.name,
        path=str(outfile),
        imsize=window.imsize,
    )
    return CutoutResult(
        name=position.name,
        status=CutoutStatus.WRITTEN,
        output_path=outfile,
        imsize=window.imsize,
        elapsed_seconds=time.monotonic() - start_time,
    )
