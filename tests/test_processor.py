"""
Tests for single-position cutouts, end to end through the file system.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from astropy.io import fits
from astropy.wcs import WCS

from fits_cutter.cutouts import SourceImage, make_cutout, output_path_for
from fits_cutter.models import CutoutStatus, SkyPosition

from tests.fixtures.images import FIELD_DEC, FIELD_RA, ImageFactory

SCENARIO_A_SIZE = 0.0416666666


@pytest.fixture
def centre() -> SkyPosition:
    return SkyPosition(name="centre", ra=FIELD_RA, dec=FIELD_DEC)


class TestMakeCutout:
    """Tests for written cutouts."""

    def test_scenario_a(self, source_image: SourceImage, centre: SkyPosition, tmp_path: Path):
        outfile = tmp_path / "centre.fits"

        result = make_cutout(source_image, centre, SCENARIO_A_SIZE, outfile)

        assert result.status == CutoutStatus.WRITTEN
        assert result.output_path == outfile
        assert result.imsize == 84

        with fits.open(outfile) as hdul:
            header = hdul[0].header
            assert header["NAXIS"] == 2
            assert header["NAXIS1"] == 84
            assert header["NAXIS2"] == 84
            assert header["CRPIX1"] == 42
            assert header["CRPIX2"] == 42
            assert header["BITPIX"] == -32

    def test_pixels_match_source(self, source_image: SourceImage, centre: SkyPosition, tmp_path: Path):
        outfile = tmp_path / "centre.fits"
        make_cutout(source_image, centre, SCENARIO_A_SIZE, outfile)

        expected = ImageFactory.pixels(1000, 1000)[459:543, 459:543]
        with fits.open(outfile) as hdul:
            np.testing.assert_array_equal(hdul[0].data, expected)

    def test_output_wcs_places_centre(self, source_image: SourceImage, centre: SkyPosition, tmp_path: Path):
        outfile = tmp_path / "centre.fits"
        make_cutout(source_image, centre, SCENARIO_A_SIZE, outfile)

        with fits.open(outfile) as hdul:
            wcs = WCS(hdul[0].header)
        ra, dec = wcs.all_pix2world(41, 41, 0)

        assert float(dec) == pytest.approx(FIELD_DEC, abs=1e-9)
        assert float(ra) == pytest.approx(FIELD_RA, abs=0.001)

    def test_accepts_path(self, field_image: Path, centre: SkyPosition, tmp_path: Path):
        result = make_cutout(field_image, centre, 0.005, tmp_path / "out.fits")

        assert result.status == CutoutStatus.WRITTEN

    def test_creates_output_directory(self, source_image: SourceImage, centre: SkyPosition, tmp_path: Path):
        outfile = tmp_path / "nested" / "dir" / "centre.fits"

        make_cutout(source_image, centre, 0.005, outfile)

        assert outfile.exists()

    def test_idempotent(self, source_image: SourceImage, centre: SkyPosition, tmp_path: Path):
        first = tmp_path / "first.fits"
        second = tmp_path / "second.fits"

        make_cutout(source_image, centre, SCENARIO_A_SIZE, first)
        make_cutout(source_image, centre, SCENARIO_A_SIZE, second)
        make_cutout(source_image, centre, SCENARIO_A_SIZE, second, overwrite=True)

        assert first.read_bytes() == second.read_bytes()

    def test_existing_file_is_not_overwritten(self, source_image: SourceImage, centre: SkyPosition, tmp_path: Path):
        outfile = tmp_path / "centre.fits"
        make_cutout(source_image, centre, 0.005, outfile)

        with pytest.raises(OSError):
            make_cutout(source_image, centre, 0.005, outfile)

    @pytest.mark.parametrize("fixture_name", ["cube_image", "hypercube_image"])
    def test_cube_cutout_is_two_dimensional(self, request, fixture_name, centre: SkyPosition, tmp_path: Path):
        image_path = request.getfixturevalue(fixture_name)
        outfile = tmp_path / "cube_cut.fits"

        result = make_cutout(image_path, centre, SCENARIO_A_SIZE, outfile)

        assert result.imsize == 84
        with fits.open(outfile) as hdul:
            assert hdul[0].data.shape == (84, 84)
            assert hdul[0].header["CTYPE3"] == "FREQ"

    def test_edge_position_is_clamped(self, source_image: SourceImage, tmp_path: Path):
        ra, dec = source_image.wcs.all_pix2world(3, 500, 0)
        position = SkyPosition(name="edge", ra=float(ra), dec=float(dec))

        result = make_cutout(source_image, position, SCENARIO_A_SIZE, tmp_path / "edge.fits")

        assert result.status == CutoutStatus.WRITTEN
        assert result.imsize < 84
        with fits.open(tmp_path / "edge.fits") as hdul:
            assert hdul[0].data.shape == (result.imsize, result.imsize)


class TestMakeCutoutSkipped:
    """Tests for positions outside the image."""

    def test_scenario_b_no_file(self, source_image: SourceImage, tmp_path: Path):
        position = SkyPosition(name="offimage", ra=FIELD_RA + 1.0, dec=FIELD_DEC)
        outfile = tmp_path / "offimage.fits"

        result = make_cutout(source_image, position, SCENARIO_A_SIZE, outfile)

        assert result.status == CutoutStatus.SKIPPED
        assert result.succeeded
        assert "offimage" in result.message
        assert not outfile.exists()


class TestOutputPath:
    """Tests for output file naming."""

    def test_name_only(self):
        assert output_path_for("src1") == Path("src1.fits")

    def test_with_directory(self, tmp_path: Path):
        assert output_path_for("src1", tmp_path) == tmp_path / "src1.fits"
