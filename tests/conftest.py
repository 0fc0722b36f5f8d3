"""
Pytest configuration and shared fixtures for FITS Cutter.

This module provides:
- Synthetic FITS images (2-D field, cubes, broken pixel scale)
- An opened SourceImage for the standard field
- Position table files

Example usage in tests:
    def test_something(field_image, tmp_path):
        result = make_cutout(field_image, position, 0.04, tmp_path / "out.fits")
        assert result.status == CutoutStatus.WRITTEN
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from fits_cutter.config.settings import get_settings
from fits_cutter.cutouts import SourceImage

from tests.fixtures.images import ImageFactory


# ============================================================================
# IMAGE FIXTURES
# ============================================================================


@pytest.fixture
def field_image(tmp_path: Path) -> Path:
    """Provide the 1000x1000 test field with (218, 34.5) on pixel (500, 500).

    Returns:
        Path to the FITS file
    """
    return ImageFactory.create(tmp_path / "field.fits")


@pytest.fixture
def source_image(field_image: Path) -> SourceImage:
    """Provide the test field opened as a SourceImage."""
    return SourceImage.open(field_image)


@pytest.fixture
def cube_image(tmp_path: Path) -> Path:
    """Provide the test field as a 3-axis cube (degenerate FREQ axis)."""
    return ImageFactory.create_cube(tmp_path / "cube.fits")


@pytest.fixture
def hypercube_image(tmp_path: Path) -> Path:
    """Provide the test field as a 4-axis cube (FREQ and STOKES)."""
    return ImageFactory.create_cube(tmp_path / "hypercube.fits", stokes=True)


@pytest.fixture
def no_cdelt2_image(tmp_path: Path) -> Path:
    """Provide an image whose header lacks CDELT2."""
    return ImageFactory.create(tmp_path / "no_cdelt2.fits", naxis1=50, naxis2=50, cdelt2=None)


# ============================================================================
# POSITION TABLE FIXTURES
# ============================================================================


@pytest.fixture
def write_table(tmp_path: Path) -> Callable[[str], Path]:
    """Provide a helper that writes CSV text to a table file.

    Returns:
        Function taking CSV text and returning the file path
    """

    def _write(text: str, name: str = "sources.csv") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from FITSCUT_* variables and the settings cache."""
    for key in list(os.environ):
        if key.startswith("FITSCUT_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow")
    config.addinivalue_line("markers", "integration: mark as integration test")
    config.addinivalue_line("markers", "unit: mark as unit test")
