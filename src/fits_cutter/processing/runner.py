"""
Cutout Runner.

Runs cutouts for one position or a whole position table, isolating
failures per position and aggregating the outcomes.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import structlog

from ..cutouts.image import SourceImage
from ..cutouts.processor import make_cutout, output_path_for
from ..exceptions import PixelScaleError
from ..models.positions import SkyPosition
from ..models.results import CutoutResult, CutoutStatus
from ..sources.table import TableRow

logger = structlog.get_logger(__name__)


def _failed(name: str, message: str, start_time: float) -> CutoutResult:
    return CutoutResult(
        name=name,
        status=CutoutStatus.FAILED,
        message=message,
        elapsed_seconds=time.monotonic() - start_time,
    )


@dataclass
class BatchResult:
    """Outcomes of a batch of cutouts, in completion order."""

    results: list[CutoutResult] = field(default_factory=list)
    total_elapsed_seconds: float = 0.0
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    def _count(self, status: CutoutStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def written_count(self) -> int:
        """Number of cutout files written."""
        return self._count(CutoutStatus.WRITTEN)

    @property
    def skipped_count(self) -> int:
        """Number of positions outside the image."""
        return self._count(CutoutStatus.SKIPPED)

    @property
    def failed_count(self) -> int:
        """Number of positions that failed."""
        return self._count(CutoutStatus.FAILED)

    @property
    def failures(self) -> list[CutoutResult]:
        return [r for r in self.results if r.status == CutoutStatus.FAILED]

    @property
    def all_success(self) -> bool:
        """True if no position failed (skips are not failures)."""
        return all(r.succeeded for r in self.results)


class CutoutRunner:
    """Makes cutouts from one source image.

    The image is validated once on construction; a missing or zero pixel
    scale raises PixelScaleError before any cutout is attempted. Each
    position then re-opens the image, so positions share no mutable state.

    Usage:
        runner = CutoutRunner("field.fits", size=0.04, workers=4)

        # Single position
        result = runner.run_one(SkyPosition(name="src1", ra=218.0, dec=34.5))

        # Position table
        batch = runner.run_batch(read_position_table("sources.csv"))
        for failure in batch.failures:
            print(failure.name, failure.message)
    """

    def __init__(
        self,
        image_path: str | Path,
        size: float,
        *,
        workers: int = 4,
        output_dir: Path | None = None,
        overwrite: bool = False,
    ):
        """Initialize runner.

        Args:
            image_path: Source FITS image
            size: Cutout width and height (deg)
            workers: Worker threads for batch runs
            output_dir: Directory for cutout files (None = current directory)
            overwrite: Replace existing cutout files

        Raises:
            PixelScaleError: Source image has no usable pixel scale
        """
        self.image_path = Path(image_path)
        self.size = size
        self.workers = max(1, workers)
        self.output_dir = output_dir
        self.overwrite = overwrite

        self.image = SourceImage.open(self.image_path)

    def run_one(self, position: SkyPosition, outfile: str | Path | None = None) -> CutoutResult:
        """Make one cutout, converting any per-position error to a result.

        Args:
            position: Cutout centre
            outfile: Output path (default: ``<output_dir>/<name>.fits``)

        Returns:
            CutoutResult; FAILED results carry the error message

        Raises:
            PixelScaleError: Always fatal, never converted
        """
        start_time = time.monotonic()
        path = Path(outfile) if outfile else output_path_for(position.name, self.output_dir)

        with structlog.contextvars.bound_contextvars(source=position.name):
            try:
                return make_cutout(
                    SourceImage.open(self.image_path),
                    position,
                    self.size,
                    path,
                    overwrite=self.overwrite,
                )
            except PixelScaleError:
                raise
            except Exception as e:
                logger.error("cutout_failed", source=position.name, error=str(e))
                return _failed(position.name, str(e), start_time)

    def run_row(self, row: TableRow) -> CutoutResult:
        """Parse and cut one table row; parse errors fail only this row."""
        start_time = time.monotonic()

        with structlog.contextvars.bound_contextvars(source=row.name):
            try:
                position = row.to_position()
            except Exception as e:
                logger.error("cutout_failed", source=row.name, row=row.line, error=str(e))
                return _failed(row.name, str(e), start_time)
        return self.run_one(position)

    def run_batch(self, rows: Sequence[TableRow]) -> BatchResult:
        """Cut every row of a position table in parallel.

        Every row yields exactly one result; a failing row never aborts the
        others. A row reusing an earlier row's name would write the same
        ``<name>.fits`` and fails without being cut.

        Args:
            rows: Position table rows

        Returns:
            BatchResult with one CutoutResult per row
        """
        start_time = time.monotonic()
        batch_result = BatchResult()

        logger.info(
            "batch_run_started",
            image=str(self.image_path),
            positions=len(rows),
            naxis=self.image.naxis,
            workers=self.workers,
        )

        first_line: dict[str, int] = {}
        unique_rows = []
        for row in rows:
            if row.name in first_line:
                message = (
                    f"Row {row.line} ({row.name}): duplicate source name, "
                    f"already used by row {first_line[row.name]}"
                )
                logger.error("cutout_failed", source=row.name, row=row.line, error=message)
                batch_result.results.append(_failed(row.name, message, time.monotonic()))
            else:
                first_line[row.name] = row.line
                unique_rows.append(row)

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            futures = {pool.submit(self.run_row, row): row for row in unique_rows}
            for future in as_completed(futures):
                batch_result.results.append(future.result())

        batch_result.total_elapsed_seconds = time.monotonic() - start_time
        batch_result.completed_at = datetime.now(UTC)

        logger.info(
            "batch_run_completed",
            written=batch_result.written_count,
            skipped=batch_result.skipped_count,
            failed=batch_result.failed_count,
            elapsed_seconds=round(batch_result.total_elapsed_seconds, 2),
        )

        return batch_result
