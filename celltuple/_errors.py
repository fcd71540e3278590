"""Exceptions raised by cell complex operations.

All of these signal a violated precondition and are raised before the
complex is modified. Absent results (no switch across a boundary, no
connecting path for a tuple, no simplex containing a point) are returned as
``None`` instead.
"""


class CellComplexError(Exception):
    """Base class for errors raised by a cell complex."""


class InvalidBoundaryError(CellComplexError, ValueError):
    """The cells given to ``add`` do not form a boundary (their own
    boundaries do not cancel mod 2, or they are of mixed dimension)."""


class NonManifoldInsertionError(CellComplexError):
    """Adding the cell would put more than two cells strictly between a
    face and a cell two ranks above it (diamond property)."""


class InvalidSwitchIndexError(CellComplexError, IndexError):
    """``switch`` was called with a rank outside ``[0, dim]``."""


class InvalidFlipError(CellComplexError, ValueError):
    """``flip`` was called on a facet that does not have exactly two
    top-dimensional cofacets."""
