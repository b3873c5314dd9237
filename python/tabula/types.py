"""Shape and index value types.

Both are plain named tuples, so they unpack like ``(rows, columns)`` /
``(row, column)`` and compare equal to ordinary tuples.
"""

from typing import NamedTuple


class Shape(NamedTuple):
    """Matrix dimensions ``(rows, columns)``."""

    rows: int
    columns: int

    def transpose(self):
        return Shape(self.columns, self.rows)


class Index(NamedTuple):
    """A ``(row, column)`` coordinate or displacement into a base shape."""

    row: int
    column: int


ORIGIN = Index(0, 0)
