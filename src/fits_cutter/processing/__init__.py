"""
Cutout run orchestration.

CutoutRunner validates the source image once, then makes cutouts for a
single position or for every row of a position table. Batch rows run on a
thread pool; each row produces exactly one CutoutResult, and failures are
collected rather than raised.

Example:
    >>> from fits_cutter.processing import CutoutRunner
    >>> from fits_cutter.sources import read_position_table
    >>>
    >>> runner = CutoutRunner("field.fits", size=0.04, workers=8)
    >>> batch = runner.run_batch(read_position_table("sources.csv"))
    >>> print(f"{batch.written_count} written, {batch.failed_count} failed")
"""

from fits_cutter.processing.runner import BatchResult, CutoutRunner

__all__ = [
    "BatchResult",
    "CutoutRunner",
]
