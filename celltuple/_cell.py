import functools
import logging

import numpy


"""Cell objects"""
@functools.total_ordering
class Cell:
    """An element of the face poset of a complex.

    A cell only knows its dimension, the complex that owns it and its
    creation index, drawn from the counter of the complex when not given.
    Incidence is stored by the complex.

    Cells are ordered increasing by dimension; cells of the same dimension
    are ordered by creation index, which is unique within a complex.
    """
    def __init__(self, dim, complex, index=None):
        if complex is None:
            raise ValueError("Cells must belong to a complex")
        if index is None:
            complex.index += 1
            index = complex.index
        self.dim = dim
        self.complex = complex
        self.index = index

    def __lt__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return (self.dim, self.index) < (other.dim, other.index)

    # Identity semantics, cells are map keys
    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)

    def __repr__(self):
        return "{}(dim={}, index={})".format(type(self).__name__, self.dim,
                                             self.index)

    def up(self, offset=1):
        return self.complex.up(self, offset)

    def down(self, offset=1):
        return self.complex.down(self, offset)

    # Endpoints of an edge; the first two facets for any other cell
    def head(self):
        return self.down()[0]

    def tail(self):
        return self.down()[1]


class Vertex(Cell):
    """0-cell carrying an optional coordinate payload.

    :param x: sequence of coordinates, optional. Stored as a tuple in
              ``self.x`` and as a float array in ``self.x_a``.
    """
    def __init__(self, complex, index=None, x=None):
        super().__init__(0, complex, index=index)
        self.x = None
        self.x_a = None
        if x is not None:
            self.x = tuple(x)
            self.x_a = numpy.array(self.x, dtype=float)

    def __getitem__(self, k):
        return self.x[k]

    def __repr__(self):
        return "Vertex(index={}, x={})".format(self.index, self.x)


class Simplex(Cell):
    """Full-dimensional cell of a simplicial complex."""
    def __init__(self, complex, index=None):
        super().__init__(complex.dim, complex, index=index)

    def vertices(self):
        """The 0-cells of the simplex in cell order"""
        return sorted(self.down(self.dim))

    def contains(self, point):
        """
        Check if a point lies in the simplex.

        The point is substituted for each vertex in turn; it is outside as
        soon as one substitution gives the opposite orientation to the
        simplex itself. A zero orientation never excludes, so points on the
        boundary are inside.

        :param point: coordinate sequence or a Vertex
        :return: boolean, True if the point is inside or on the boundary
        """
        orient = self.complex.orient
        points = [v.x_a for v in self.vertices()]
        if isinstance(point, Vertex):
            point = point.x_a
        else:
            point = numpy.asarray(point, dtype=float)

        orientation = orient(points)
        if orientation == 0:
            logging.warning("Degenerate simplex {} has zero "
                            "orientation".format(self))

        p = list(points)
        for i in range(len(points)):
            p[i] = point
            if orient(p) == -orientation:
                return False
            p[i] = points[i]

        return True
