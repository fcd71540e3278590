"""Cell complexes with coordinates attached to their vertices"""
import numbers

from celltuple._cell import Vertex
from celltuple._complex import CellComplex


class PiecewiseLinearComplex(CellComplex):
    """A cell complex whose 0-cells are Vertex objects with coordinates.

    Coordinates are attached when a vertex is created and are never stored
    on higher dimensional cells.
    """
    _x = None  # Coordinates for the vertex being created

    def new_cell(self, dim):
        if dim == 0:
            return Vertex(self, x=self._x)
        return super().new_cell(dim)

    def add(self, boundary=()):
        """
        Add a cell given its boundary, or a vertex given its coordinates.

        :param boundary: collection of cells, or a sequence of numbers
                         which is taken as the coordinates of a new vertex
        :return: the new cell
        """
        if _is_coordinates(boundary):
            return self.add_vertex(boundary)
        return super().add(boundary)

    def add_vertex(self, x=None):
        """Add a 0-cell with coordinates x (optional)"""
        self._x = x
        try:
            return super().add(())
        finally:
            self._x = None


def _is_coordinates(seq):
    try:
        first = seq[0]
    except (IndexError, KeyError, TypeError):
        return False
    return isinstance(first, numbers.Number)
