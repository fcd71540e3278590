"""
Base classes for cell-tuple complexes.

A cell complex is stored as two incidence maps, ``lower`` (cell -> facets)
and ``upper`` (cell -> cofacets), bounded by two sentinel cells: the empty
face (dimension -1) below every vertex and the full face (dimension n+1)
above every top cell. A switch table keyed by ``(lower, cell, upper)``
triples gives, for every slot of the face poset occupied by exactly two
cells, the other cell. Applying a switch to a ``CellTuple`` (a maximal flag
of the poset) moves it to its neighbour differing in one rank, which
generalises the next/twin operators of a half-edge mesh to any dimension.

Cells are created bottom-up with ``CellComplex.add`` and removed with
``CellComplex.delete``, which cascades to every cell above.
"""
# Std. Library
import contextlib
import logging

# Module specific imports
from celltuple._cell import Cell
from celltuple._errors import (InvalidBoundaryError,
                               NonManifoldInsertionError,
                               InvalidSwitchIndexError)


def _unique(cells):
    """Remove duplicates while keeping first-seen order"""
    return list(dict.fromkeys(cells))



def _remove(cells, cell):
    """Remove cell from a list, returning the index it was at"""
    i = cells.index(cell)
    del cells[i]
    return i


def _insert(cells, cell, i=None):
    if i is None:
        cells.append(cell)
    else:
        cells.insert(i, cell)


class _Positions:
    """Where a detached cell was in the incidence lists of its complex"""
    def __init__(self):
        self.bucket = None  # index in cells[dim]
        self.top = None  # index in the full face's lower list
        self.upper = {}  # boundary position -> index in that facet's upper


class CellTuple:
    """
    An ordered list of cells, one for each dimension 0..n, used as a handle
    into a complex. It can also be viewed as a simplex of the barycentric
    subdivision of the complex.

    Tuples are values: ``replace`` and ``CellComplex.switch`` return new
    tuples and never modify an existing one.
    """
    def __init__(self, complex, cells):
        self.complex = complex
        self.cells = tuple(cells)
        self.dim = len(self.cells) - 1
        for i, c in enumerate(self.cells):
            if not isinstance(c, Cell) or c.dim != i:
                raise ValueError("tuple entry {} must be a cell of dimension "
                                 "{}, got {!r}".format(i, i, c))
        if complex is not None and complex.dim != self.dim:
            raise ValueError("wrong number of cells ({}) for a tuple in this "
                             "complex (dim = {})".format(self.dim + 1,
                                                         complex.dim))

    def __getitem__(self, k):
        return self.cells[k]

    def __iter__(self):
        return iter(self.cells)

    def __len__(self):
        return len(self.cells)

    def __eq__(self, other):
        if not isinstance(other, CellTuple):
            return NotImplemented
        return self.complex is other.complex and self.cells == other.cells

    def __hash__(self):
        return hash((id(self.complex), self.cells))

    def __repr__(self):
        return "CellTuple({})".format(", ".join(repr(c) for c in self.cells))

    def replace(self, k, cell):
        """Return a copy of the tuple with entry k replaced by cell"""
        cells = list(self.cells)
        cells[k] = cell
        return CellTuple(self.complex, cells)


# Main complex class:
class CellComplex:
    def __init__(self, dim):
        """
        A complex of cells of dimension 0..dim described by the incidence
        relations between them.

        Important methods:
            Construction and destruction:
                    CellComplex.add, CellComplex.delete
            Boundary and coboundary:
                    CellComplex.down, CellComplex.up
            Orbit traversal:
                    CellComplex.tuple, CellComplex.switch

        Important objects:
            cc.cells: live cells per dimension, cc.cells[d] in creation order
            cc.empty_face, cc.full_face: the sentinel bounds of the poset

        :param dim: int, dimension of the top cells of the complex
        """
        if dim < 0:
            raise ValueError("complex dimension must be >= 0, got "
                             "{}".format(dim))
        self.dim = dim
        self.index = -1  # Creation counter shared by all cells

        self.cells = [[] for _ in range(dim + 1)]
        self._lower = {}
        self._upper = {}
        self._switch = {}
        # Journal of attach/detach operations while a transaction is open
        self._journal = None

        # Special faces for the top and bottom of the face poset.
        self.empty_face = self.new_cell(-1)
        self.full_face = self.new_cell(dim + 1)
        for c in (self.empty_face, self.full_face):
            self._lower[c] = []
            self._upper[c] = []

    def __contains__(self, cell):
        return cell in self._lower

    def new_cell(self, dim):
        """Create a cell of dimension dim. Override this method to store
        cells of some dimensions in a different object."""
        return Cell(dim, self)

    def f_vector(self):
        """Number of live cells in each dimension 0..dim"""
        return tuple(len(cells) for cells in self.cells)

    # %% Construction
    def add(self, boundary=()):
        """
        Create a new cell with the given boundary and add it to the complex.

        :param boundary: collection of cells of equal dimension whose own
                         boundaries cancel mod 2. Empty for a new vertex.
        :return: the new cell
        """
        boundary = list(boundary)
        top = self._check_boundary(boundary)
        cell_dim = top + 1

        # The boundary of a 0-cell is the empty face
        if cell_dim == 0:
            boundary = [self.empty_face]

        cell = self.new_cell(cell_dim)
        self._attach(cell, boundary)
        return cell

    def _check_boundary(self, boundary):
        """Validate a boundary before anything is modified. Returns the
        dimension of the boundary cells (-1 for an empty boundary)."""
        if not boundary:
            # In a 0-dimensional complex vertices are the top cells
            if self.dim == 0 and len(self._upper[self.empty_face]) > 1:
                raise NonManifoldInsertionError(
                    "diamond property violation, a 0-dimensional complex "
                    "holds at most two vertices")
            return -1

        dims = {c.dim for c in boundary}
        if len(dims) != 1:
            raise InvalidBoundaryError("boundary cells have mixed "
                                       "dimensions {}".format(sorted(dims)))
        bdim = dims.pop()
        if bdim < 0 or bdim >= self.dim:
            raise InvalidBoundaryError("cannot add a cell of dimension {} "
                                       "to a complex of dimension "
                                       "{}".format(bdim + 1, self.dim))
        if len(set(boundary)) != len(boundary):
            raise InvalidBoundaryError("boundary contains repeated cells")
        for c in boundary:
            if c not in self:
                raise InvalidBoundaryError("{!r} is not a cell of this "
                                           "complex".format(c))

        # Every face below the boundary must be met an even number of times
        meets = self._facets_by_face(boundary)
        for g, facets in meets.items():
            if len(facets) % 2 == 1:
                raise InvalidBoundaryError("not a valid boundary, {!r} "
                                           "bounds {} of the given "
                                           "cells".format(g, len(facets)))
            if len(facets) > 2:
                raise NonManifoldInsertionError("diamond property violation "
                                                "below {!r}".format(g))

        if bdim + 1 == self.dim:
            for f in boundary:
                if len(self._upper[f]) > 1:
                    raise NonManifoldInsertionError(
                        "diamond property violation, {!r} already bounds "
                        "two top cells".format(f))
        return bdim

    def _facets_by_face(self, boundary):
        """Map each facet g of the boundary cells to the boundary cells
        containing g."""
        meets = {}
        for f in boundary:
            for g in self._lower[f]:
                meets.setdefault(g, []).append(f)
        return meets

    def _attach(self, cell, boundary, positions=None):
        """Register cell with an already validated boundary and add the new
        switch operations involving it.

        positions, as recorded by _detach, puts the cell back at the places
        it held in the incidence lists; by default it is appended.
        """
        is_top = cell.dim == self.dim
        if positions is None:
            positions = _Positions()
        self._lower[cell] = list(boundary)
        self._upper[cell] = [self.full_face] if is_top else []
        if is_top:
            _insert(self._lower[self.full_face], cell, positions.top)
        _insert(self.cells[cell.dim], cell, positions.bucket)

        for i, f in enumerate(boundary):
            _insert(self._upper[f], cell, positions.upper.get(i))
            if is_top:
                self._add_switches(f, self._upper[f], self.full_face)

        if cell.dim > 0:
            for g, facets in self._facets_by_face(boundary).items():
                self._add_switches(g, facets, cell)

        if self._journal is not None:
            self._journal.append(('attach', cell, None, None))

    def _add_switches(self, lower_face, switch_faces, upper_face):
        if len(switch_faces) > 2:
            raise NonManifoldInsertionError("diamond property violation")
        if len(switch_faces) == 2:
            a, b = switch_faces
            self._switch[(lower_face, a, upper_face)] = b
            self._switch[(lower_face, b, upper_face)] = a

    def _clear_switches(self, lower_face, cell, upper_face):
        other = self._switch.pop((lower_face, cell, upper_face), None)
        if other is not None:
            self._switch.pop((lower_face, other, upper_face), None)

    # %% Destruction
    def delete(self, cell):
        """
        Delete the given cell from the complex. All other cells that contain
        it in their boundary are also deleted.

        :param cell: a cell of this complex; sentinels are never deleted
        """
        if cell is self.full_face or cell is self.empty_face:
            return
        if cell not in self:
            return

        # Collect the full coboundary closure first, then remove it
        # highest dimension first so cofaces go before their faces.
        closure = {cell: None}
        stack = [cell]
        while stack:
            c = stack.pop()
            for u in self._upper[c]:
                if u is not self.full_face and u not in closure:
                    closure[u] = None
                    stack.append(u)

        for c in sorted(closure, reverse=True):
            self._detach(c)

    def _detach(self, cell):
        """Remove a cell with no cofaces other than the full face"""
        positions = _Positions()
        boundary = self._lower.pop(cell)
        upper = self._upper.pop(cell)
        if upper:  # top cell, upper == [full_face]
            positions.top = _remove(self._lower[self.full_face], cell)

        for i, f in enumerate(boundary):
            self._clear_switches(f, cell, self.full_face)
            for g in self._lower[f]:
                self._clear_switches(g, f, cell)
            positions.upper[i] = _remove(self._upper[f], cell)

        positions.bucket = _remove(self.cells[cell.dim], cell)

        if self._journal is not None:
            self._journal.append(('detach', cell, boundary, positions))

    @contextlib.contextmanager
    def _transaction(self):
        """Undo every attach/detach made inside the block if it raises"""
        if self._journal is not None:  # Nested, the outer block undoes
            yield
            return

        self._journal = []
        try:
            yield
        except BaseException:
            journal, self._journal = self._journal, None
            logging.debug("Rolling back {} operations".format(len(journal)))
            # Undone in reverse, so every list is back in the state the
            # recorded positions refer to
            for op, cell, boundary, positions in reversed(journal):
                if op == 'attach':
                    self._detach(cell)
                else:
                    self._attach(cell, boundary, positions)
            raise
        else:
            self._journal = None

    # %% Navigation
    def down(self, cell, offset=1):
        """
        Retrieve the cells which are offset dimensions lower than cell and
        on its boundary.

        :param cell: a cell of this complex
        :param offset: int >= 1
        :return: list of cells without duplicates
        """
        return self._walk(self._lower, cell, offset)

    def up(self, cell, offset=1):
        """
        Retrieve the cells which are offset dimensions higher than cell and
        on its coboundary.

        :param cell: a cell of this complex
        :param offset: int >= 1
        :return: list of cells without duplicates
        """
        return self._walk(self._upper, cell, offset)

    def _walk(self, incidence, cell, offset):
        if offset < 1:
            raise ValueError("offset must be >= 1, got {}".format(offset))
        if cell not in self:
            raise ValueError("{!r} is not a cell of this complex".format(cell))
        cells = list(incidence[cell])
        for _ in range(offset - 1):
            cells = _unique(n for c in cells for n in incidence[c])
        return cells

    def tuple(self, *cells):
        """
        Return a tuple containing the given cells, or None if no flag of
        the complex passes through all of them.

        With no arguments a tuple through the first vertex is returned.
        """
        cells = [c for c in cells
                 if c is not self.empty_face and c is not self.full_face]
        if not cells:
            if not self.cells[0]:
                return None
            cells = [self.cells[0][0]]
        if any(c not in self for c in cells):
            return None

        chain = sorted(cells)
        chain.append(self.full_face)
        path = self._falling_path(chain[0])
        for s, t in zip(chain[:-1], chain[1:]):
            p = self._rising_path(s, t)
            if p is None:
                return None
            path.extend(p)

        return CellTuple(self, path[:-1])

    def _falling_path(self, s):
        """Chain of cells from a vertex up to and including s"""
        path = [s]
        while s.dim > 0:
            s = self._lower[s][0]
            path.append(s)
        path.reverse()
        return path

    def _rising_path(self, s, t):
        """Chain of cells above s up to and including t, found by
        depth-first search up the poset; None if t is not above s."""
        if s is t:
            return []
        if s.dim >= t.dim:
            return None

        visited = {s}
        stack = [(s, [])]
        while stack:
            c, path = stack.pop()
            for u in reversed(self._upper[c]):
                if u is t:
                    return path + [u]
                if u.dim < t.dim and u not in visited:
                    visited.add(u)
                    stack.append((u, path + [u]))
        return None

    def switch(self, k, t):
        """
        Switch the cell of dimension k in tuple t for the other cell of that
        dimension sharing the rest of the flag.

        :param k: int, rank to switch, 0 <= k <= dim
        :param t: CellTuple
        :return: a new CellTuple, or None on the boundary of the complex or
                 for a tuple of another complex
        """
        if not 0 <= k <= self.dim:
            raise InvalidSwitchIndexError("bad call to switch, k = {} not in "
                                          "[0, {}]".format(k, self.dim))
        if t is None or t.complex is not self:
            return None

        lower_face = self.empty_face if k == 0 else t[k - 1]
        upper_face = self.full_face if k == self.dim else t[k + 1]
        other = self._switch.get((lower_face, t[k], upper_face))
        if other is None:
            return None
        return t.replace(k, other)
