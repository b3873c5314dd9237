"""Exceptions raised by tabula.

Every failure condition has its own class; all of them derive from
:class:`MatrixError` and from the builtin exception matching their meaning,
so callers may catch either.
"""


class MatrixError(Exception):
    """Base class of all tabula errors."""


class NonPositiveSizeError(MatrixError, ValueError):
    """A shape has a non-positive number of rows or columns."""


class InvalidElementsError(MatrixError, ValueError):
    """Constructor elements are malformed (wrong count or duplicated coordinate)."""


class DifferentSizeError(MatrixError, ValueError):
    """Two operands of an element-wise operation differ in shape."""


class NotMultipliableError(MatrixError, ValueError):
    """The inner dimensions of a matrix product do not match."""


class OutOfRangeError(MatrixError, IndexError):
    """An index lies outside the shape being addressed."""


class ViewOutOfBaseError(MatrixError, ValueError):
    """A requested view does not fit inside its backing storage."""


class SerializationError(MatrixError, ValueError):
    """Encoded input could not be decoded."""


class IncompatibleVersionError(SerializationError):
    """The encoded format version is not supported by this decoder."""


class AlreadyInitializedError(SerializationError):
    """State was decoded into a matrix that is already initialized."""


class UnknownRewriterError(SerializationError):
    """No rewriter is registered under the given tag."""


__all__ = [
    "MatrixError",
    "NonPositiveSizeError",
    "InvalidElementsError",
    "DifferentSizeError",
    "NotMultipliableError",
    "OutOfRangeError",
    "ViewOutOfBaseError",
    "SerializationError",
    "IncompatibleVersionError",
    "AlreadyInitializedError",
    "UnknownRewriterError",
]
