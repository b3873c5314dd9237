"""Shape and index checks shared by every matrix backend.

Each check raises exactly one error class from :mod:`tabula.errors` and
returns ``None`` otherwise.
"""

from .errors import (
    DifferentSizeError,
    InvalidElementsError,
    NonPositiveSizeError,
    NotMultipliableError,
    OutOfRangeError,
    ViewOutOfBaseError,
)


def shape_should_be_positive(rows, columns):
    """Raise :class:`NonPositiveSizeError` unless both dimensions are > 0."""
    if rows <= 0 or columns <= 0:
        raise NonPositiveSizeError(
            f"shape must be positive, got ({rows}, {columns})"
        )


def shape_should_be_same(m, n):
    """Raise :class:`DifferentSizeError` unless ``m`` and ``n`` share a shape."""
    if tuple(m.shape) != tuple(n.shape):
        raise DifferentSizeError(
            f"shapes differ: {tuple(m.shape)} vs {tuple(n.shape)}"
        )


def shape_should_be_multipliable(m, n):
    """Raise :class:`NotMultipliableError` unless ``m.columns == n.rows``."""
    if m.columns != n.rows:
        raise NotMultipliableError(
            f"cannot multiply {tuple(m.shape)} by {tuple(n.shape)}"
        )


def index_should_be_in_range(rows, columns, row, column):
    """Raise :class:`OutOfRangeError` unless ``(row, column)`` lies in ``(rows, columns)``."""
    if not (0 <= row < rows and 0 <= column < columns):
        raise OutOfRangeError(
            f"index ({row}, {column}) out of range for shape ({rows}, {columns})"
        )


def view_should_be_in_base(base, view, offset):
    """Raise :class:`ViewOutOfBaseError` unless ``offset + view`` fits in ``base``.

    All three arguments are in physical orientation.
    """
    if offset.row < 0 or offset.column < 0:
        raise ViewOutOfBaseError(f"view offset must be non-negative, got {tuple(offset)}")
    if offset.row + view.rows > base.rows or offset.column + view.columns > base.columns:
        raise ViewOutOfBaseError(
            f"view {tuple(view)} at offset {tuple(offset)} exceeds base {tuple(base)}"
        )


def elements_should_match_shape(rows, columns, count):
    """Raise :class:`InvalidElementsError` unless ``count == rows * columns``."""
    if count != rows * columns:
        raise InvalidElementsError(
            f"expected {rows * columns} elements for shape ({rows}, {columns}), got {count}"
        )
