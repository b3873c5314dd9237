"""Versioned encoding of matrices as JSON text or compact bytes.

Both encodings carry the full descriptor of the matrix (base shape, view
shape, offset and rewriter) together with the storage it views, so a
decoded view describes the same window over an equivalent root.

JSON document::

    {
      "version": 0,
      "format": "dense" | "hash",
      "base": {"rows": R, "columns": C},
      "view": {"rows": r, "columns": c},
      "offset": {"row": i, "column": j},
      "rewriter": "identity" | "transpose",
      "elements": [...]
    }

Dense ``elements`` is the whole base buffer in row-major order. Hash
``elements`` lists ``{"row", "column", "value"}`` objects in base
coordinates.

Binary layout (little-endian): the magic ``b"TBLA"``, an int64 header
``[version, format, rewriter, base.rows, base.columns, view.rows,
view.columns, offset.row, offset.column, count]`` and the payload, which is
``count`` float64 values for dense, or ``count`` int64 keys followed by
``count`` float64 values for hash.

Decoding re-runs the construction checks and raises the same errors as the
constructors; input that is malformed before any check can run raises
:class:`~tabula.errors.SerializationError`.
"""

import json
import logging

import numpy as np

from . import rewriters, validates
from .errors import IncompatibleVersionError, MatrixError, SerializationError
from .matrix import Dense, Element, Hash
from .types import Index, Shape

logger = logging.getLogger("tabula.serialization")

VERSION = 0
MIN_VERSION = 0
MAX_VERSION = 0

MAGIC = b"TBLA"

_FORMATS = {"dense": Dense, "hash": Hash}
_FORMAT_CODES = ("dense", "hash")
_HEADER_SIZE = 10
_I8 = np.dtype("<i8")
_F8 = np.dtype("<f8")


def _format_of(m):
    for name, cls in _FORMATS.items():
        if isinstance(m, cls):
            return name
    raise TypeError(f"cannot serialize {type(m).__name__}")


def _check_version(version):
    if not (MIN_VERSION <= version <= MAX_VERSION):
        raise IncompatibleVersionError(
            f"format version {version} is outside [{MIN_VERSION}, {MAX_VERSION}]"
        )


def _as_int(x):
    """Coordinates and dimensions must be integral numbers; booleans are not."""
    if isinstance(x, bool):
        raise SerializationError(f"expected an integer, got {x!r}")
    if isinstance(x, int):
        return x
    if isinstance(x, float) and x.is_integer():
        return int(x)
    raise SerializationError(f"expected an integer, got {x!r}")


def _build(name, base, view, offset, rewriter, payload):
    """Validate a decoded descriptor and rebuild the matrix it describes."""
    validates.shape_should_be_positive(base.rows, base.columns)
    validates.shape_should_be_positive(view.rows, view.columns)
    validates.index_should_be_in_range(base.rows, base.columns, offset.row, offset.column)
    validates.view_should_be_in_base(base, view, offset)
    root = _FORMATS[name](base.rows, base.columns, payload)
    return root._derive(view, offset, rewriter)


# ----------------------------------------------------------------------
# JSON


def to_state(m) -> dict:
    """JSON-compatible state of ``m``."""
    name = _format_of(m)
    if name == "dense":
        elements = m.buffer.tolist()
    else:
        columns = m.base_shape.columns
        elements = [
            {"row": key // columns, "column": key % columns, "value": value}
            for key, value in m.elements.items()
        ]
    return {
        "version": VERSION,
        "format": name,
        "base": {"rows": m.base_shape.rows, "columns": m.base_shape.columns},
        "view": {"rows": m.view_shape.rows, "columns": m.view_shape.columns},
        "offset": {"row": m.offset.row, "column": m.offset.column},
        "rewriter": m.rewriter.tag,
        "elements": elements,
    }


def from_state(state):
    """Rebuild a matrix from :func:`to_state` output.

    Raises
    ------
    SerializationError
        If ``state`` is structurally malformed.
    IncompatibleVersionError
        If the version is not supported.
    UnknownRewriterError
        If the rewriter tag is unknown.
    NonPositiveSizeError, OutOfRangeError, ViewOutOfBaseError, InvalidElementsError
        If the descriptor or elements fail the construction checks.
    """
    try:
        return _from_state(state)
    except MatrixError as e:
        logger.debug("rejected encoded matrix: %s", e)
        raise


def _from_state(state):
    try:
        version = _as_int(state["version"])
        _check_version(version)
        name = state["format"]
        if name not in _FORMATS:
            raise SerializationError(f"unknown matrix format {name!r}")
        base = Shape(_as_int(state["base"]["rows"]), _as_int(state["base"]["columns"]))
        view = Shape(_as_int(state["view"]["rows"]), _as_int(state["view"]["columns"]))
        offset = Index(_as_int(state["offset"]["row"]), _as_int(state["offset"]["column"]))
        rewriter = rewriters.get(state["rewriter"])
        elements = state["elements"]
        if name == "hash":
            elements = [
                Element(_as_int(e["row"]), _as_int(e["column"]), float(e["value"]))
                for e in elements
            ]
    except MatrixError:
        raise
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise SerializationError(f"malformed matrix state: {e!r}") from e
    m = _build(name, base, view, offset, rewriter, elements)
    logger.debug("decoded %s matrix with base %s", name, tuple(base))
    return m


def dumps(m, **kwargs) -> str:
    """Encode ``m`` as a JSON string. Keyword arguments go to :func:`json.dumps`."""
    return json.dumps(to_state(m), **kwargs)


def loads(s):
    """Decode a matrix from a JSON string or bytes."""
    try:
        state = json.loads(s)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError for undecodable bytes
        raise SerializationError(f"invalid JSON: {e}") from e
    return from_state(state)


def dump(m, fp, **kwargs) -> None:
    """Write ``m`` as JSON to the text file object ``fp``."""
    fp.write(dumps(m, **kwargs))


def load(fp):
    """Read a JSON-encoded matrix from the file object ``fp``."""
    return loads(fp.read())


# ----------------------------------------------------------------------
# Binary


def to_bytes(m) -> bytes:
    """Encode ``m`` in the compact binary layout."""
    name = _format_of(m)
    if name == "dense":
        payload = [np.asarray(m.buffer, dtype=_F8)]
    else:
        store = m.elements
        payload = [
            np.fromiter(store.keys(), dtype=_I8, count=len(store)),
            np.fromiter(store.values(), dtype=_F8, count=len(store)),
        ]
    header = np.array(
        [
            VERSION,
            _FORMAT_CODES.index(name),
            rewriters.tags().index(m.rewriter.tag),
            m.base_shape.rows,
            m.base_shape.columns,
            m.view_shape.rows,
            m.view_shape.columns,
            m.offset.row,
            m.offset.column,
            payload[0].size,
        ],
        dtype=_I8,
    )
    logger.debug("encoded %s matrix with base %s", name, tuple(m.base_shape))
    return MAGIC + header.tobytes() + b"".join(p.tobytes() for p in payload)


def from_bytes(data):
    """Decode a matrix produced by :func:`to_bytes`.

    Raises the same errors as :func:`from_state`.
    """
    try:
        return _from_bytes(bytes(data))
    except MatrixError as e:
        logger.debug("rejected encoded matrix: %s", e)
        raise


def _from_bytes(data):
    if not data.startswith(MAGIC):
        raise SerializationError("missing tabula magic")
    body = len(MAGIC) + _HEADER_SIZE * _I8.itemsize
    if len(data) < body:
        raise SerializationError("truncated header")
    header = [int(x) for x in np.frombuffer(data, dtype=_I8, count=_HEADER_SIZE, offset=len(MAGIC))]
    version, fmt, tag, base_rows, base_columns, view_rows, view_columns, row, column, count = header
    _check_version(version)
    if not (0 <= fmt < len(_FORMAT_CODES)):
        raise SerializationError(f"unknown matrix format code {fmt}")
    name = _FORMAT_CODES[fmt]
    if not (0 <= tag < len(rewriters.tags())):
        raise SerializationError(f"unknown rewriter code {tag}")
    rewriter = rewriters.get(rewriters.tags()[tag])
    if count < 0:
        raise SerializationError(f"negative element count {count}")

    item_size = _F8.itemsize if name == "dense" else _I8.itemsize + _F8.itemsize
    if len(data) != body + count * item_size:
        raise SerializationError(
            f"expected {body + count * item_size} bytes, got {len(data)}"
        )
    validates.shape_should_be_positive(base_rows, base_columns)
    if name == "dense":
        payload = np.frombuffer(data, dtype=_F8, count=count, offset=body).copy()
    else:
        keys = np.frombuffer(data, dtype=_I8, count=count, offset=body)
        values = np.frombuffer(data, dtype=_F8, count=count, offset=body + count * _I8.itemsize)
        payload = [
            Element(int(k) // base_columns, int(k) % base_columns, float(v))
            for k, v in zip(keys, values)
        ]
    m = _build(
        name,
        Shape(base_rows, base_columns),
        Shape(view_rows, view_columns),
        Index(row, column),
        rewriter,
        payload,
    )
    logger.debug("decoded %s matrix with base %s", name, tuple(m.base_shape))
    return m
