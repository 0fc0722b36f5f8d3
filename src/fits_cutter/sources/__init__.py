"""
Cutout position sources.

- read_position_table(path): Headerless ``name, ra, dec`` CSV -> TableRow list
- TableRow.to_position(): Parse one row into a SkyPosition
"""

from fits_cutter.sources.table import TableRow, read_position_table

__all__ = [
    "TableRow",
    "read_position_table",
]
