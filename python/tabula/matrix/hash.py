"""Sparse matrix stored in a hash map.

Non-zero cells live in a ``dict`` keyed by the linear physical index
``row * base.columns + column``; an absent key is an implicit zero. Writing
``0.0`` removes the key, so the key set is always exactly the non-zero set.
Like the dense buffer, the dict is created once by the root matrix and
shared by every view derived from it.
"""

from types import MappingProxyType
from typing import NamedTuple

import numpy as np

from .. import rewriters, validates
from ..cursors import LookaheadCursor
from ..errors import InvalidElementsError
from ..types import ORIGIN, Shape
from .base import Matrix


class Element(NamedTuple):
    """A ``(row, column, value)`` triple used to build a :class:`Hash`."""

    row: int
    column: int
    value: float


class HashNonZerosCursor(LookaheadCursor):
    """Walks the shared map, keeping only keys inside the matrix window.

    The key set is captured when the cursor is created. Keys removed
    afterwards are skipped and values are read when visited.
    """

    def __init__(self, matrix):
        super().__init__()
        self._matrix = matrix
        self._elements = matrix._elements
        self._keys = iter(list(self._elements))

    def _advance(self):
        for key in self._keys:
            value = self._elements.get(key)
            if value is None:
                continue
            coordinate = self._matrix._logical(key)
            if coordinate is None:
                continue
            return value, coordinate[0], coordinate[1]
        return None


class Hash(Matrix):
    """Hash-based sparse matrix.

    Parameters
    ----------
    rows, columns : int
        Matrix shape. Both must be positive.
    elements : iterable of Element or (row, column, value), optional
        Cells to set. Zero values are accepted but not stored.

    Raises
    ------
    NonPositiveSizeError
        If ``rows`` or ``columns`` is not positive.
    InvalidElementsError
        If an element lies outside the shape or two elements share a
        coordinate.

    Examples
    --------
    >>> from tabula import Hash
    >>> a = Hash(2, 3, [(0, 0, 1.0), (0, 2, 2.0), (1, 1, 3.0)])
    >>> a.nnz
    3
    >>> a.update(0, 0, 0.0).nnz
    2
    >>> a.T.get(2, 0)
    2.0
    """

    def __init__(self, rows, columns, elements=()):
        validates.shape_should_be_positive(rows, columns)
        shape = Shape(rows, columns)
        super().__init__(shape, shape, ORIGIN, rewriters.IDENTITY)
        self._elements = {}
        seen = set()
        for element in elements:
            row, column, value = element
            if not (0 <= row < rows and 0 <= column < columns):
                raise InvalidElementsError(
                    f"element ({row}, {column}) lies outside shape ({rows}, {columns})"
                )
            key = row * columns + column
            if key in seen:
                raise InvalidElementsError(f"duplicate element at ({row}, {column})")
            seen.add(key)
            value = float(value)
            if value != 0:
                self._elements[key] = value

    @classmethod
    def new(cls, rows, columns):
        """Curried constructor: ``Hash.new(2, 2)(Element(0, 0, 1.0), ...)``.

        The shape is validated before any elements are supplied.
        """
        validates.shape_should_be_positive(rows, columns)

        def constructor(*elements):
            return cls(rows, columns, elements)

        return constructor

    @classmethod
    def zeros(cls, rows, columns):
        return cls(rows, columns)

    @classmethod
    def from_array(cls, array):
        """Build from a 2-D array-like, storing only its non-zero cells."""
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError("Hash.from_array requires a 2D array")
        rows, columns = np.nonzero(arr)
        return cls(
            arr.shape[0],
            arr.shape[1],
            [Element(int(r), int(c), float(arr[r, c])) for r, c in zip(rows, columns)],
        )

    @property
    def elements(self):
        """Read-only mapping of the shared store, keyed by physical base index."""
        return MappingProxyType(self._elements)

    def _load(self, key):
        return self._elements.get(key, 0.0)

    def _store(self, key, value):
        if value == 0:
            self._elements.pop(key, None)
        else:
            self._elements[key] = value

    def _storage(self):
        return self._elements

    def non_zeros(self):
        return HashNonZerosCursor(self)

    @property
    def nnz(self) -> int:
        if not self.is_view:
            return len(self._elements)
        return sum(1 for key in self._elements if self._logical(key) is not None)

    def scale(self, s):
        s = float(s)
        for key in list(self._elements):
            if self._logical(key) is None:
                continue
            e = self._elements[key] * s
            if e == 0:
                del self._elements[key]
            else:
                self._elements[key] = e
        return self
