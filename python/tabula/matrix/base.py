"""Base class for matrices and the operators shared by every backend.

A :class:`Matrix` is a light descriptor over storage owned by a root
matrix: the shape of that storage (``base_shape``), the window it exposes
(``view_shape`` and ``offset``, both in physical orientation) and a
:mod:`rewriter <tabula.rewriters>` mapping logical coordinates to physical
ones. Views, rows, columns and transposes are new descriptors over the same
storage, so writes through any of them are seen by all of them.

Concrete backends supply storage access by linear physical key
(``_load``/``_store``), a non-zero cursor, in-place scaling and a zero
constructor. Everything else lives here and only talks to the backend
through those hooks and the cursor protocol, which is what lets the
operators mix backends freely.
"""

import logging
import math
import numbers

import numpy as np

from .. import _runtime, rewriters, validates
from ..cursors import AllCursor, DiagonalCursor
from ..errors import AlreadyInitializedError
from ..types import ORIGIN, Index, Shape

logger = logging.getLogger("tabula.matrix")


class Matrix:
    """Abstract base class for 2-D float64 matrices.

    Parameters
    ----------
    base : Shape
        Shape of the backing storage.
    view : Shape
        Physical shape of the exposed window.
    offset : Index
        Physical position of the window inside the base.
    rewriter : tabula.rewriters.Rewriter
        Logical-to-physical coordinate rewriter.

    Notes
    -----
    Subclasses construct root matrices; derived views are produced by
    :meth:`_derive`, which shares every storage attribute of the source.
    """

    def __init__(self, base, view, offset, rewriter):
        self._base = base
        self._view = view
        self._offset = offset
        self._rewriter = rewriter
        self._initialized = True

    # ------------------------------------------------------------------
    # Backend hooks

    @classmethod
    def zeros(cls, rows, columns):
        raise NotImplementedError

    def _load(self, key):
        raise NotImplementedError

    def _store(self, key, value):
        raise NotImplementedError

    def _storage(self):
        """The storage object shared by this matrix and all its views."""
        raise NotImplementedError

    def non_zeros(self):
        """Cursor over the cells whose value is not exactly zero."""
        raise NotImplementedError

    def scale(self, s):
        """Multiply every cell of this view by ``s`` in place and return self."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Descriptor

    @property
    def shape(self):
        """Logical shape ``(rows, columns)``."""
        return Shape(*self._rewriter.rewrite(self._view.rows, self._view.columns))

    @property
    def rows(self) -> int:
        return self.shape.rows

    @property
    def columns(self) -> int:
        return self.shape.columns

    @property
    def ndim(self) -> int:
        return 2

    @property
    def dtype(self):
        return np.dtype(np.float64)

    @property
    def base_shape(self):
        return self._base

    @property
    def view_shape(self):
        return self._view

    @property
    def offset(self):
        return self._offset

    @property
    def rewriter(self):
        return self._rewriter

    @property
    def is_view(self) -> bool:
        """Whether this descriptor exposes less than its whole base."""
        return self._view != self._base

    @property
    def nnz(self) -> int:
        """Number of non-zero cells in this view."""
        return sum(1 for _ in self.non_zeros())

    def _key(self, row, column):
        row, column = self._rewriter.rewrite(row, column)
        return (row + self._offset.row) * self._base.columns + column + self._offset.column

    def _logical(self, key):
        """Logical coordinate of a physical key, or ``None`` outside the window."""
        row, column = divmod(key, self._base.columns)
        row -= self._offset.row
        column -= self._offset.column
        if not (0 <= row < self._view.rows and 0 <= column < self._view.columns):
            return None
        return self._rewriter.rewrite(row, column)

    def _read(self, row, column):
        return self._load(self._key(row, column))

    def _write(self, row, column, value):
        self._store(self._key(row, column), value)

    def _derive(self, view, offset, rewriter):
        n = object.__new__(type(self))
        n.__dict__.update(self.__dict__)
        n._view = view
        n._offset = offset
        n._rewriter = rewriter
        return n

    # ------------------------------------------------------------------
    # Element access

    def get(self, row, column):
        """Return the element at ``(row, column)``.

        Raises
        ------
        OutOfRangeError
            If the index lies outside :attr:`shape`.
        """
        validates.index_should_be_in_range(self.rows, self.columns, row, column)
        return self._read(row, column)

    def update(self, row, column, value):
        """Overwrite the element at ``(row, column)`` and return self.

        Raises
        ------
        OutOfRangeError
            If the index lies outside :attr:`shape`.
        """
        validates.index_should_be_in_range(self.rows, self.columns, row, column)
        self._write(row, column, float(value))
        return self

    def __getitem__(self, key):
        row, column = key
        return self.get(row, column)

    def __setitem__(self, key, value):
        row, column = key
        self.update(row, column, value)

    def all(self):
        """Cursor over every cell in row-major order."""
        return AllCursor(self._read, self.rows, self.columns)

    def diagonal(self):
        """Cursor over the cells ``(i, i)``."""
        return DiagonalCursor(self._read, self.rows, self.columns)

    # ------------------------------------------------------------------
    # Views

    def transpose(self):
        """Transposed view sharing this matrix's storage."""
        return self._derive(self._view, self._offset, self._rewriter.transpose())

    @property
    def T(self):
        return self.transpose()

    def view(self, row, column, rows, columns):
        """Rectangular view of ``rows x columns`` cells starting at ``(row, column)``.

        Coordinates are logical. The window is checked against the backing
        storage, not against this view.

        Raises
        ------
        NonPositiveSizeError
            If ``rows`` or ``columns`` is not positive.
        ViewOutOfBaseError
            If the window does not fit in the backing storage.
        """
        row, column = self._rewriter.rewrite(row, column)
        rows, columns = self._rewriter.rewrite(rows, columns)
        validates.shape_should_be_positive(rows, columns)
        offset = Index(self._offset.row + row, self._offset.column + column)
        view = Shape(rows, columns)
        validates.view_should_be_in_base(self._base, view, offset)
        return self._derive(view, offset, self._rewriter)

    def row(self, row):
        """View of a single row."""
        validates.index_should_be_in_range(self.rows, self.columns, row, 0)
        return self.view(row, 0, 1, self.columns)

    def column(self, column):
        """View of a single column."""
        validates.index_should_be_in_range(self.rows, self.columns, 0, column)
        return self.view(0, column, self.rows, 1)

    def base(self):
        """View of the whole backing storage, keeping the rewriter."""
        return self._derive(self._base, ORIGIN, self._rewriter)

    # ------------------------------------------------------------------
    # Operators

    def equal(self, n) -> bool:
        """Element-wise equality with ``n``.

        Raises
        ------
        DifferentSizeError
            If the shapes differ.
        """
        validates.shape_should_be_same(self, n)
        for value, row, column in n.all():
            if self._read(row, column) != value:
                return False
        return True

    def add(self, n):
        """Add ``n`` to this matrix in place and return self."""
        validates.shape_should_be_same(self, n)
        for value, row, column in self._operand(n):
            self._write(row, column, self._read(row, column) + value)
        return self

    def subtract(self, n):
        """Subtract ``n`` from this matrix in place and return self."""
        validates.shape_should_be_same(self, n)
        for value, row, column in self._operand(n):
            self._write(row, column, self._read(row, column) - value)
        return self

    def _operand(self, n):
        # Cells of n must be read before any write when n views our storage.
        cursor = n.non_zeros()
        if n._storage() is self._storage():
            return list(cursor)
        return cursor

    def multiply(self, n):
        """Matrix product ``self @ n`` as a new root matrix of this backend.

        Only the non-zero cells of ``n`` are visited, so the cost is
        proportional to ``self.rows * n.nnz``.

        Raises
        ------
        NotMultipliableError
            If ``self.columns != n.rows``.
        """
        validates.shape_should_be_multipliable(self, n)
        rows, columns = self.rows, n.columns
        logger.debug(
            "multiply %s%s by %s%s",
            type(self).__name__, tuple(self.shape), type(n).__name__, tuple(n.shape),
        )
        r = type(self).zeros(rows, columns)
        for value, j, k in n.non_zeros():
            for i in range(rows):
                r._write(i, k, r._read(i, k) + self._read(i, j) * value)
        return r

    def max(self):
        """Largest cell as ``(value, row, column)``.

        Ties go to the first cell in row-major order. A NaN cell wins over
        every number, so the first NaN is returned when there is one.
        """
        return self._extreme(lambda a, b: a > b)

    def min(self):
        """Smallest cell as ``(value, row, column)``; ties and NaN as in :meth:`max`."""
        return self._extreme(lambda a, b: a < b)

    def _extreme(self, better):
        cursor = self.all()
        best = cursor.get()
        for element in cursor:
            if math.isnan(best[0]):
                break
            if math.isnan(element[0]) or better(element[0], best[0]):
                best = element
        return best

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __iadd__(self, other):
        if isinstance(other, Matrix):
            return self.add(other)
        return NotImplemented

    def __isub__(self, other):
        if isinstance(other, Matrix):
            return self.subtract(other)
        return NotImplemented

    def __imul__(self, alpha):
        if isinstance(alpha, numbers.Real):
            return self.scale(float(alpha))
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, Matrix):
            return self.copy().add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Matrix):
            return self.copy().subtract(other)
        return NotImplemented

    def __mul__(self, alpha):
        if isinstance(alpha, numbers.Real):
            return self.copy().scale(float(alpha))
        return NotImplemented

    __rmul__ = __mul__

    # ------------------------------------------------------------------
    # Conversion

    @classmethod
    def convert(cls, m):
        """Return ``m`` if it already is a ``cls``, else a ``cls`` copy of it."""
        if isinstance(m, cls):
            return m
        return cls._copy_of(m)

    @classmethod
    def _copy_of(cls, m):
        n = cls.zeros(m.rows, m.columns)
        for value, row, column in m.non_zeros():
            n._write(row, column, value)
        return n

    def copy(self):
        """New root matrix of the same backend with the same contents."""
        return type(self)._copy_of(self)

    def toarray(self):
        """Materialize as a dense ``numpy.ndarray`` of shape :attr:`shape`."""
        out = np.zeros(self.shape, dtype=np.float64)
        for value, row, column in self.non_zeros():
            out[row, column] = value
        return out

    # ------------------------------------------------------------------
    # Pickling goes through the versioned state of tabula.serialization.

    def __getstate__(self):
        from ..serialization import to_state

        return to_state(self)

    def __setstate__(self, state):
        from ..serialization import from_state

        if getattr(self, "_initialized", False):
            raise AlreadyInitializedError(f"{type(self).__name__} is already initialized")
        decoded = from_state(state)
        if type(decoded) is not type(self):
            raise TypeError(
                f"state describes a {type(decoded).__name__}, not a {type(self).__name__}"
            )
        self.__dict__.update(decoded.__dict__)

    # ------------------------------------------------------------------
    # Printing

    def __repr__(self):
        return (
            f"{type(self).__name__}(shape={tuple(self.shape)}, base={tuple(self._base)}, "
            f"offset={tuple(self._offset)}, rewriter={self._rewriter.tag})"
        )

    def __str__(self):
        opts = _runtime.get_print_options()
        rows, columns = self.shape
        shown_rows = min(rows, opts["max_rows"])
        shown_columns = min(columns, opts["max_columns"])
        lines = []
        for i in range(shown_rows):
            cells = [
                f"{self._read(i, j):.{opts['precision']}g}" for j in range(shown_columns)
            ]
            if shown_columns < columns:
                cells.append("...")
            lines.append("[" + ", ".join(cells) + "]")
        if shown_rows < rows:
            lines.append("...")
        return "\n".join([repr(self)] + lines)


# ----------------------------------------------------------------------
# Structural predicates


def is_zeros(m) -> bool:
    """Whether every cell of ``m`` is zero."""
    return not m.non_zeros().has_next()


def is_square(m) -> bool:
    return m.rows == m.columns


def is_special_diagonal(m, match) -> bool:
    """Whether ``m`` is square and ``match(value, row, column)`` holds for every cell."""
    if not is_square(m):
        return False
    for value, row, column in m.all():
        if not match(value, row, column):
            return False
    return True


def is_diagonal(m) -> bool:
    """Whether ``m`` is square with zeros everywhere off the diagonal."""
    return is_special_diagonal(m, lambda value, row, column: row == column or value == 0)


def is_identity(m) -> bool:
    return is_special_diagonal(
        m, lambda value, row, column: value == (1 if row == column else 0)
    )


def is_scalar(m) -> bool:
    """Whether ``m`` is diagonal with one value repeated along the diagonal."""
    if not is_square(m):
        return False
    first = m.get(0, 0)
    return is_special_diagonal(
        m, lambda value, row, column: value == (first if row == column else 0)
    )
