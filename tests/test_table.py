"""
Tests for the position table reader.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fits_cutter.exceptions import PositionTableError
from fits_cutter.sources import TableRow, read_position_table


class TestReadPositionTable:
    """Tests for reading CSV files."""

    def test_reads_rows_in_order(self, write_table):
        path = write_table("src1,218.0,34.5\nsrc2,218.1,-34.6\nsrc3,0,0\n")

        rows = read_position_table(path)

        assert [row.name for row in rows] == ["src1", "src2", "src3"]
        assert rows[1].fields == ("src2", "218.1", "-34.6")
        assert [row.line for row in rows] == [1, 2, 3]

    def test_first_row_is_data(self, write_table):
        """There is no header row."""
        rows = read_position_table(write_table("name,ra,dec\nsrc1,1,2\n"))

        assert len(rows) == 2
        with pytest.raises(PositionTableError, match="cannot parse ra"):
            rows[0].to_position()

    def test_whitespace_is_stripped(self, write_table):
        rows = read_position_table(write_table("src1, 218.0 , 34.5\n"))

        assert rows[0].fields == ("src1", "218.0", "34.5")

    def test_blank_lines_skipped(self, write_table):
        rows = read_position_table(write_table("src1,1,2\n\nsrc2,3,4\n"))

        assert [row.name for row in rows] == ["src1", "src2"]

    def test_numeric_names_stay_strings(self, write_table):
        rows = read_position_table(write_table("007,1,2\n"))

        assert rows[0].name == "007"

    def test_short_row_is_kept_for_per_row_failure(self, write_table):
        rows = read_position_table(write_table("src1,1,2\nsrc2,3\nsrc3,5,6\n"))

        assert len(rows) == 3
        with pytest.raises(PositionTableError, match="expected 3 columns"):
            rows[1].to_position()
        assert rows[2].to_position().ra == 5.0

    def test_long_row_is_kept_for_per_row_failure(self, write_table):
        rows = read_position_table(write_table("src1,1,2\nsrc2,3,4,extra\nsrc3,5,6\n"))

        assert [row.name for row in rows] == ["src1", "src2", "src3"]
        assert rows[1].fields == ("src2", "3", "4", "extra")
        with pytest.raises(PositionTableError, match="Row 2 \\(src2\\): expected 3 columns"):
            rows[1].to_position()
        assert rows[0].to_position().ra == 1.0
        assert rows[2].to_position().dec == 6.0

    def test_short_first_row(self, write_table):
        rows = read_position_table(write_table("src1,1\nsrc2,3,4\n"))

        assert len(rows) == 2
        with pytest.raises(PositionTableError, match="expected 3 columns"):
            rows[0].to_position()
        assert rows[1].to_position().name == "src2"

    def test_very_wide_row(self, write_table):
        rows = read_position_table(write_table("src1,1,2\n" + "wide," * 40 + "end\n"))

        assert len(rows) == 2
        with pytest.raises(PositionTableError, match="expected 3 columns"):
            rows[1].to_position()

    def test_empty_file(self, write_table):
        assert read_position_table(write_table("")) == []

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(PositionTableError, match="Cannot read"):
            read_position_table(tmp_path / "missing.csv")


class TestTableRow:
    """Tests for parsing individual rows."""

    def test_to_position(self):
        position = TableRow(line=1, fields=("src1", "218.0", "-34.5")).to_position()

        assert position.name == "src1"
        assert position.ra == 218.0
        assert position.dec == -34.5

    def test_unparsable_ra(self):
        row = TableRow(line=4, fields=("src1", "abc", "34.5"))

        with pytest.raises(PositionTableError, match="Row 4 \\(src1\\): cannot parse ra 'abc'"):
            row.to_position()

    def test_unparsable_dec(self):
        with pytest.raises(PositionTableError, match="cannot parse dec"):
            TableRow(line=1, fields=("src1", "1.0", "north")).to_position()

    def test_dec_out_of_range(self):
        with pytest.raises(PositionTableError):
            TableRow(line=1, fields=("src1", "1.0", "95.0")).to_position()

    def test_nan_rejected(self):
        with pytest.raises(PositionTableError):
            TableRow(line=1, fields=("src1", "nan", "1.0")).to_position()

    def test_blank_name_falls_back_to_row(self):
        row = TableRow(line=7, fields=("", "1.0", "2.0"))

        assert row.name == "row7"
        with pytest.raises(PositionTableError):
            row.to_position()
