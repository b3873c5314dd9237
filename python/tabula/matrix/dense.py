"""Dense matrix stored in a flat NumPy buffer.

The buffer is a contiguous float64 ``numpy.ndarray`` of length
``base.rows * base.columns`` in row-major order over the base shape. It is
allocated once by the root matrix; every view derived from it holds the same
array object.
"""

import numpy as np

from .. import rewriters, validates
from ..cursors import ScanNonZerosCursor
from ..errors import InvalidElementsError
from ..types import ORIGIN, Shape
from .base import Matrix


class Dense(Matrix):
    """Dense matrix.

    Parameters
    ----------
    rows, columns : int
        Matrix shape. Both must be positive.
    elements : iterable of float, optional
        Exactly ``rows * columns`` values in row-major order (nested
        sequences are flattened). Copied into a new buffer. When omitted the
        matrix is all zeros.

    Raises
    ------
    NonPositiveSizeError
        If ``rows`` or ``columns`` is not positive.
    InvalidElementsError
        If ``elements`` does not hold exactly ``rows * columns`` numbers.

    Examples
    --------
    >>> from tabula import Dense
    >>> a = Dense(2, 3, [1.0, 0.0, 2.0, 0.0, 1.0, 0.0])
    >>> a.get(0, 2)
    2.0
    >>> a.T.shape
    Shape(rows=3, columns=2)
    >>> a.view(0, 1, 2, 2).update(0, 0, 9.0) is not a
    True
    >>> a.get(0, 1)
    9.0
    """

    def __init__(self, rows, columns, elements=None):
        validates.shape_should_be_positive(rows, columns)
        if elements is None:
            buffer = np.zeros(rows * columns, dtype=np.float64)
        else:
            try:
                if not isinstance(elements, (np.ndarray, list, tuple)):
                    elements = list(elements)
                buffer = np.array(elements, dtype=np.float64).reshape(-1)
            except (TypeError, ValueError, OverflowError) as e:
                raise InvalidElementsError(f"elements are not numeric: {e}") from e
            validates.elements_should_match_shape(rows, columns, buffer.size)
        shape = Shape(rows, columns)
        super().__init__(shape, shape, ORIGIN, rewriters.IDENTITY)
        self._buffer = buffer

    @classmethod
    def new(cls, rows, columns):
        """Curried constructor: ``Dense.new(2, 2)(1.0, 2.0, 3.0, 4.0)``.

        The shape is validated before any elements are supplied.
        """
        validates.shape_should_be_positive(rows, columns)

        def constructor(*elements):
            return cls(rows, columns, list(elements))

        return constructor

    @classmethod
    def zeros(cls, rows, columns):
        return cls(rows, columns)

    @classmethod
    def from_array(cls, array):
        """Copy a 2-D array-like into a new dense matrix."""
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError("Dense.from_array requires a 2D array")
        return cls(arr.shape[0], arr.shape[1], arr)

    @classmethod
    def _copy_of(cls, m):
        return cls.from_array(m.toarray())

    @property
    def buffer(self):
        """The shared backing buffer (row-major over :attr:`base_shape`)."""
        return self._buffer

    def _load(self, key):
        return float(self._buffer[key])

    def _store(self, key, value):
        self._buffer[key] = value

    def _storage(self):
        return self._buffer

    def _window(self):
        # 2-D numpy view of this descriptor's window; writes reach the buffer.
        grid = self._buffer.reshape(self._base.rows, self._base.columns)
        return grid[
            self._offset.row : self._offset.row + self._view.rows,
            self._offset.column : self._offset.column + self._view.columns,
        ]

    def non_zeros(self):
        return ScanNonZerosCursor(self._read, self.rows, self.columns)

    @property
    def nnz(self) -> int:
        return int(np.count_nonzero(self._window()))

    def scale(self, s):
        window = self._window()
        window *= float(s)
        return self

    def toarray(self):
        window = self._window()
        if self._rewriter is rewriters.TRANSPOSE:
            window = window.T
        return window.copy()

    def max(self):
        return self._arg_extreme(np.argmax)

    def min(self):
        return self._arg_extreme(np.argmin)

    def _arg_extreme(self, arg):
        arr = self.toarray()
        row, column = divmod(int(arg(arr)), arr.shape[1])
        return float(arr[row, column]), row, column
