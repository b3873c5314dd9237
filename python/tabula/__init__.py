"""tabula: dense and hash-based matrices with zero-copy views."""

from ._runtime import get_log_level, get_print_options, set_log_level, set_print_options
from . import errors as errors
from . import rewriters as rewriters
from . import serialization as serialization
from .matrix import (
    Dense,
    Element,
    Hash,
    Matrix,
    is_diagonal,
    is_identity,
    is_scalar,
    is_special_diagonal,
    is_square,
    is_zeros,
)
from .types import Index, Shape

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "set_print_options",
    "get_print_options",
    "set_log_level",
    "get_log_level",
    "errors",
    "rewriters",
    "serialization",
    "Matrix",
    "Dense",
    "Hash",
    "Element",
    "Shape",
    "Index",
    "is_zeros",
    "is_square",
    "is_special_diagonal",
    "is_diagonal",
    "is_identity",
    "is_scalar",
]
