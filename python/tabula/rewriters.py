"""Coordinate rewriters separating a view's logical frame from storage.

A rewriter maps a ``(row, column)`` pair given in one frame to the other.
There are exactly two of them: :data:`IDENTITY` leaves pairs alone and
:data:`TRANSPOSE` swaps them. Both are their own inverse, and
``transpose()`` toggles between them, so a transposed view is nothing more
than a storage descriptor carrying the opposite rewriter.
"""

from .errors import UnknownRewriterError


class Rewriter:
    """Base class of the two rewriters. Use the module-level singletons."""

    tag = None

    def rewrite(self, a, b):
        raise NotImplementedError

    def transpose(self):
        raise NotImplementedError

    def __repr__(self):
        return f"<rewriter {self.tag}>"

    def __reduce__(self):
        return (get, (self.tag,))


class Identity(Rewriter):
    tag = "identity"

    def rewrite(self, a, b):
        return a, b

    def transpose(self):
        return TRANSPOSE


class Transpose(Rewriter):
    tag = "transpose"

    def rewrite(self, a, b):
        return b, a

    def transpose(self):
        return IDENTITY


IDENTITY = Identity()
TRANSPOSE = Transpose()

_REGISTRY = {r.tag: r for r in (IDENTITY, TRANSPOSE)}


def get(tag):
    """Return the rewriter registered under ``tag``.

    Raises
    ------
    UnknownRewriterError
        If ``tag`` names no rewriter.
    """
    try:
        return _REGISTRY[tag]
    except (KeyError, TypeError):
        raise UnknownRewriterError(f"unknown rewriter {tag!r}") from None


def tags():
    """Tags of all rewriters, in registration order."""
    return tuple(_REGISTRY)
