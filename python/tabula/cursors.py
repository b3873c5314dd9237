"""Cursor protocol for walking matrix elements.

A cursor yields ``(value, row, column)`` triples in the logical frame of the
matrix that created it. It is single-pass: ``has_next()`` reports whether
another element remains and ``get()`` takes it. Cursors are also Python
iterators, so ``for value, row, column in m.non_zeros(): ...`` works, and a
cursor drained by a loop stays drained.

Backends create cursors over a ``reader(row, column)`` callable that reads
the cell at a logical coordinate without re-validating it.
"""


class Cursor:
    """Abstract single-pass cursor."""

    def has_next(self) -> bool:
        raise NotImplementedError

    def get(self):
        """Take the next ``(value, row, column)`` triple.

        Raises
        ------
        StopIteration
            If the cursor is exhausted.
        """
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self):
        if not self.has_next():
            raise StopIteration
        return self.get()


class LookaheadCursor(Cursor):
    """Cursor whose subclasses only produce the next element or ``None``.

    ``has_next()`` pulls one element ahead and keeps it until ``get()``.
    """

    def __init__(self):
        self._pending = None
        self._done = False

    def _advance(self):
        raise NotImplementedError

    def has_next(self) -> bool:
        if self._pending is None and not self._done:
            self._pending = self._advance()
            if self._pending is None:
                self._done = True
        return self._pending is not None

    def get(self):
        if not self.has_next():
            raise StopIteration
        element, self._pending = self._pending, None
        return element


class AllCursor(Cursor):
    """Every cell of a ``rows x columns`` matrix in row-major order."""

    def __init__(self, reader, rows, columns):
        self._reader = reader
        self._columns = columns
        self._size = rows * columns
        self._position = 0

    def has_next(self) -> bool:
        return self._position < self._size

    def get(self):
        if not self.has_next():
            raise StopIteration
        row, column = divmod(self._position, self._columns)
        self._position += 1
        return self._reader(row, column), row, column


class DiagonalCursor(Cursor):
    """Cells ``(i, i)`` for ``0 <= i < min(rows, columns)``."""

    def __init__(self, reader, rows, columns):
        self._reader = reader
        self._size = min(rows, columns)
        self._position = 0

    def has_next(self) -> bool:
        return self._position < self._size

    def get(self):
        if not self.has_next():
            raise StopIteration
        i = self._position
        self._position += 1
        return self._reader(i, i), i, i


class ScanNonZerosCursor(LookaheadCursor):
    """Row-major scan over all cells that skips exact zeros."""

    def __init__(self, reader, rows, columns):
        super().__init__()
        self._reader = reader
        self._columns = columns
        self._size = rows * columns
        self._position = 0

    def _advance(self):
        while self._position < self._size:
            row, column = divmod(self._position, self._columns)
            self._position += 1
            value = self._reader(row, column)
            if value != 0:
                return value, row, column
        return None


__all__ = [
    "Cursor",
    "LookaheadCursor",
    "AllCursor",
    "DiagonalCursor",
    "ScanNonZerosCursor",
]
