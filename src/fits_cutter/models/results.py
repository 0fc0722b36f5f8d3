"""
Per-position outcome of a cutout run.

Example:
    >>> from fits_cutter.models import CutoutResult, CutoutStatus
    >>>
    >>> result = CutoutResult(name="src1", status=CutoutStatus.WRITTEN, imsize=84)
    >>> print(result.succeeded)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field


class CutoutStatus(str, Enum):
    """What happened to one requested position."""

    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


class CutoutResult(BaseModel):
    """Outcome of producing (or not producing) one cutout.

    Attributes:
        name: Source name the result refers to
        status: Written, skipped (off-image) or failed
        output_path: Path of the written FITS file
        imsize: Final window size in pixels
        message: Skip reason or error description
        elapsed_seconds: Wall time spent on this position
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(description="Source name")
    status: CutoutStatus = Field(description="Outcome")
    output_path: Path | None = Field(default=None, description="Written file")
    imsize: int | None = Field(default=None, ge=0, description="Window size (pixels)")
    message: str | None = Field(default=None, description="Skip reason or error")
    elapsed_seconds: float = Field(default=0.0, ge=0.0)

    @computed_field  # type: ignore[misc]
    @property
    def succeeded(self) -> bool:
        """True unless the position failed; skipped positions are not errors."""
        return self.status != CutoutStatus.FAILED
