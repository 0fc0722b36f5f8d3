"""
Position table reader.

A position table is a headerless CSV with three columns: name, right
ascension and declination (degrees). Rows are parsed lazily so one bad row
fails only its own cutout.

Example:
    >>> from fits_cutter.sources import read_position_table
    >>>
    >>> rows = read_position_table("sources.csv")
    >>> for row in rows:
    ...     print(row.name, row.to_position())
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..exceptions import PositionTableError
from ..models.positions import SkyPosition

COLUMNS = ("name", "ra", "dec")

# Rows are read at this fixed width so ragged rows fail one by one instead of
# failing the whole table. Wider rows are cut to it and still fail their own
# column-count check.
MAX_FIELDS = 16


@dataclass(frozen=True)
class TableRow:
    """One raw row of a position table.

    Attributes:
        line: 1-based row number in the table
        fields: Raw string fields, stripped
    """

    line: int
    fields: tuple[str, ...]

    @property
    def name(self) -> str:
        """Source name, falling back to the row number when blank."""
        if self.fields and self.fields[0]:
            return self.fields[0]
        return f"row{self.line}"

    def to_position(self) -> SkyPosition:
        """Parse the row.

        Raises:
            PositionTableError: Wrong column count or unparsable coordinate
        """
        if len(self.fields) != len(COLUMNS) or not all(self.fields):
            raise PositionTableError(
                f"Row {self.line} ({self.name}): expected {len(COLUMNS)} columns "
                f"(name, ra, dec), got {list(self.fields)}"
            )

        name, ra_text, dec_text = self.fields
        coords = {}
        for column, text in (("ra", ra_text), ("dec", dec_text)):
            try:
                coords[column] = float(text)
            except ValueError as e:
                raise PositionTableError(
                    f"Row {self.line} ({name}): cannot parse {column} {text!r}"
                ) from e

        try:
            return SkyPosition(name=name, **coords)
        except ValueError as e:
            raise PositionTableError(f"Row {self.line} ({name}): {e}") from e


def read_position_table(path: str | Path) -> list[TableRow]:
    """Read a headerless ``name, ra, dec`` CSV.

    Args:
        path: CSV file path

    Returns:
        List of raw rows, in file order

    Raises:
        PositionTableError: File missing or not parseable as CSV
    """
    path = Path(path)

    try:
        df = pd.read_csv(
            path,
            header=None,
            names=range(MAX_FIELDS),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_truncate_fields,
        )
    except pd.errors.EmptyDataError:
        return []
    except (OSError, pd.errors.ParserError) as e:
        raise PositionTableError(f"Cannot read position table {path}: {e}") from e

    rows = []
    for line, record in enumerate(df.itertuples(index=False, name=None), start=1):
        fields = tuple("" if pd.isna(value) else str(value).strip() for value in record)
        # Every row is padded to MAX_FIELDS; trailing blanks are not fields.
        while len(fields) > len(COLUMNS) and not fields[-1]:
            fields = fields[:-1]
        rows.append(TableRow(line=line, fields=fields))

    return rows


def _truncate_fields(fields: list[str]) -> list[str]:
    return fields[:MAX_FIELDS]
