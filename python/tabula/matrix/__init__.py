from .base import (
    Matrix,
    is_diagonal,
    is_identity,
    is_scalar,
    is_special_diagonal,
    is_square,
    is_zeros,
)
from .dense import Dense
from .hash import Element, Hash

__all__ = [
    "Matrix",
    "Dense",
    "Hash",
    "Element",
    "is_zeros",
    "is_square",
    "is_special_diagonal",
    "is_diagonal",
    "is_identity",
    "is_scalar",
]
