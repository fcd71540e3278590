"""
Cell-tuple complexes of arbitrary dimension.

A cell complex stores incidence between cells and a switch table that moves
cell tuples (flags of the face poset) to their neighbours. The simplicial
layer adds vertex coordinates, point location, stellar subdivision and
bistellar flips.

Usage::

    from celltuple import SimplicialComplex

    sc = SimplicialComplex(2)
    a, b, c = sc.add([0, 0]), sc.add([10, 0]), sc.add([0, 10])
    t = sc.add([sc.add([a, b]), sc.add([b, c]), sc.add([c, a])])

    v = sc.add([2, 2])
    sc.add_star(v, sc.locate(v))
    sc.f_vector()  # (4, 6, 3)
"""
from ._cell import Cell, Simplex, Vertex
from ._complex import CellComplex, CellTuple
from ._errors import (
    CellComplexError,
    InvalidBoundaryError,
    InvalidFlipError,
    InvalidSwitchIndexError,
    NonManifoldInsertionError,
)
from ._plc import PiecewiseLinearComplex
from ._predicates import orient
from ._simplicial import SimplicialComplex

__all__ = [
    "Cell",
    "Vertex",
    "Simplex",
    "CellTuple",
    "CellComplex",
    "PiecewiseLinearComplex",
    "SimplicialComplex",
    "orient",
    "CellComplexError",
    "InvalidBoundaryError",
    "NonManifoldInsertionError",
    "InvalidSwitchIndexError",
    "InvalidFlipError",
]
