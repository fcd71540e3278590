"""
Simplicial complexes: point location and local re-triangulation.

Top cells are Simplex objects; local modifications (stellar subdivision
with ``add_star`` and bistellar flips with ``flip``) are carried out as
sequences of ``delete`` and ``add`` on the underlying cell complex and are
undone as a whole if any step fails.
"""
# Std. Library
import collections
import itertools
import logging

# Module specific imports
from celltuple import _predicates
from celltuple._cell import Simplex
from celltuple._complex import _unique
from celltuple._errors import InvalidFlipError
from celltuple._plc import PiecewiseLinearComplex


class SimplicialComplex(PiecewiseLinearComplex):
    def __init__(self, dim, orient=None):
        """
        A piecewise linear complex whose top cells are simplices.

        Important methods:
            Point location:
                    SimplicialComplex.locate, Simplex.contains
            Local modification:
                    SimplicialComplex.add_star, SimplicialComplex.flip
            Orbit walks used by flip:
                    SimplicialComplex.opposite_vertex,
                    SimplicialComplex.next_facet

        :param dim: int, dimension of the simplices (and of the space the
                    vertex coordinates live in)
        :param orient: function, optional, orientation predicate taking a
                       sequence of dim+1 points in R^dim and returning
                       -1, 0 or 1. Defaults to celltuple._predicates.orient
        """
        if dim < 1:
            raise ValueError("a simplicial complex needs dimension >= 1, got "
                             "{}".format(dim))
        self.orient = orient if orient is not None else _predicates.orient
        super().__init__(dim)

    def new_cell(self, dim):
        if dim == self.dim:
            return Simplex(self)
        return super().new_cell(dim)

    def _faces(self, cell, d):
        """Faces of dimension d of cell, cell itself if d == cell.dim"""
        if d == cell.dim:
            return [cell]
        return self.down(cell, cell.dim - d)

    def _vertex_set(self, cell):
        return frozenset(self._faces(cell, 0))

    # %% Point location
    def locate(self, point):
        """
        Find a simplex containing point by a linear scan of the top cells.

        :param point: coordinate sequence or a Vertex
        :return: the first Simplex containing point, or None
        """
        for s in self.cells[self.dim]:
            if s.contains(point):
                return s
        return None

    # %% Stellar subdivision
    def add_star(self, vertex, simplex):
        """
        Replace simplex by the cone from vertex over its boundary.

        Cones over the faces of simplex are added in increasing dimension.
        A top-dimensional simplex is deleted first and coned up to
        dimension dim - 1, giving dim + 1 new simplices around vertex. A
        lower dimensional simplex is coned up to its own dimension only.

        :param vertex: a 0-cell of the complex, usually inside simplex
        :param simplex: the cell to subdivide
        """
        if vertex not in self or vertex.dim != 0:
            raise ValueError("{!r} is not a vertex of this "
                             "complex".format(vertex))
        if simplex not in self or not 0 <= simplex.dim <= self.dim:
            raise ValueError("{!r} is not a cell of this "
                             "complex".format(simplex))

        # Collect the faces before the simplex is deleted
        faces = [self._faces(simplex, d) for d in range(simplex.dim + 1)]
        with self._transaction():
            if simplex.dim == self.dim:
                top = self.dim - 1
                self.delete(simplex)
            else:
                top = simplex.dim

            cone = {self.empty_face: vertex}
            for d in range(top + 1):
                for cell in faces[d]:
                    boundary = [cone[f] for f in self.down(cell)]
                    boundary.append(cell)
                    cone[cell] = self.add(boundary)

        logging.debug("Star of {} added over {}".format(vertex, simplex))

    # %% Orbit walks
    def opposite_vertex(self, t):
        """
        Move a tuple across its facet t[dim - 1] to the vertex of the
        adjacent top cell opposite that facet.

        :return: CellTuple with t[0] the opposite vertex, or None if the
                 facet is on the boundary
        """
        for k in range(self.dim, -1, -1):
            if t is None:
                return None
            t = self.switch(k, t)
        return t

    def next_facet(self, t):
        """Rotate a tuple to the next facet of its top cell t[dim]. dim + 1
        rotations visit every facet and return to t."""
        for k in range(self.dim - 1, -1, -1):
            if t is None:
                return None
            t = self.switch(k, t)
        return t

    # %% Bistellar flips
    def flip(self, facet):
        """
        Bistellar flip across facet.

        The dim + 2 vertices of the two simplices sharing facet span a
        (dim + 1)-simplex. The top cells of the complex lying on its
        boundary (found by walking outward from facet) are replaced by the
        remaining dim-faces of that boundary. Faces are reused where they
        already exist, and faces left without cofaces are deleted.

        No geometric check is made, whether the flip is valid (or
        improves the triangulation) is for the caller to decide with the
        orientation predicate.

        :param facet: a (dim - 1)-cell with exactly two top cofacets
        """
        n = self.dim
        if facet not in self or facet.dim != n - 1:
            raise InvalidFlipError("{!r} is not a facet of this "
                                   "complex".format(facet))
        tops = self.up(facet)
        if len(tops) != 2:
            raise InvalidFlipError("can only flip a facet shared by two top "
                                   "cells, {!r} has {}".format(facet,
                                                               len(tops)))

        vertices = _unique(v for s in tops for v in s.vertices())
        vertex_set = frozenset(vertices)
        if len(vertices) != n + 2:
            raise InvalidFlipError("simplices around {!r} span {} vertices, "
                                   "need {}".format(facet, len(vertices),
                                                    n + 2))

        flip_out = self._flip_region(facet, vertex_set)

        removed = {self._vertex_set(s) for s in flip_out}
        flip_in = [vertex_set - {v} for v in vertices
                   if vertex_set - {v} not in removed]
        if not flip_in:
            raise InvalidFlipError("no complementary triangulation for the "
                                   "simplices around {!r}".format(facet))

        # Index the faces of the flipped out simplices by vertex set
        faces = {frozenset([v]): v for v in vertices}
        existing = []
        for s in flip_out:
            for d in range(1, n):
                for f in self._faces(s, d):
                    key = self._vertex_set(f)
                    if key not in faces:
                        faces[key] = f
                        existing.append(f)

        with self._transaction():
            for s in flip_out:
                self.delete(s)

            for simplex in flip_in:
                self._build_simplex(sorted(simplex), faces)

            # Remove faces that are no longer on any simplex
            for f in sorted(existing, reverse=True):
                if f in self and not self.up(f):
                    self.delete(f)

        logging.debug("Flipped {} simplices into {} across "
                      "{}".format(len(flip_out), len(flip_in), facet))

    def _flip_region(self, facet, vertex_set):
        """Top cells reachable from facet whose vertices all lie in
        vertex_set, found by walking tuples across facets."""
        n = self.dim
        start = self.tuple(facet)
        found = {start[n]: None}
        visited = set()
        queue = collections.deque([start])
        while queue:
            t = queue.popleft()
            if t[n - 1] in visited:
                continue
            visited.add(t[n - 1])

            t = self.opposite_vertex(t)
            if t is None or t[0] not in vertex_set:
                continue
            found[t[n]] = None
            for _ in range(n + 1):
                t = self.next_facet(t)
                if t is None:
                    break
                if t[n - 1] not in visited:
                    queue.append(t)

        return list(found)

    def _build_simplex(self, vertices, faces):
        """
        Add the simplex spanned by vertices bottom-up, reusing any face
        already in faces (keyed by vertex set) and recording the new ones.

        :param vertices: sorted list of 0-cells
        :param faces: dict, frozenset of vertices -> cell
        :return: the top cell
        """
        cell = None
        for d in range(1, len(vertices)):
            for combo in itertools.combinations(vertices, d + 1):
                key = frozenset(combo)
                if key in faces:
                    cell = faces[key]
                    continue
                boundary = [faces[key - {v}] for v in combo]
                cell = self.add(boundary)
                if d < self.dim:
                    faces[key] = cell
        return cell
