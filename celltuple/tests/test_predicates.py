"""Tests for the orientation predicate."""
import functools

import numpy
import pytest

from celltuple import SimplicialComplex, orient


class TestOrient:

    def test_plane(self):
        assert orient([[0, 0], [5, 6], [2, 10]]) == 1
        assert orient([[0, 0], [2, 10], [5, 6]]) == -1

    def test_collinear(self):
        assert orient([[0.2, 0.2], [1 / 3, 1 / 3], [1 / 7, 1 / 7]]) == 0
        assert orient([[0, 0], [1, 1], [2, 2]]) == 0

    def test_space(self):
        assert orient([[0, 0, 1], [5, 6, 2], [2, 10, 3], [2, 3, -19]]) == 1
        assert orient([[5, 6, 2], [0, 0, 1], [2, 10, 3], [2, 3, -19]]) == -1

    def test_coplanar(self):
        assert orient([[0, 0, 0], [1, 0, 0], [0, 1, 0], [3, 7, 0]]) == 0

    def test_numpy_input(self):
        points = numpy.array([[0.0, 0.0], [5.0, 6.0], [2.0, 10.0]])
        assert orient(points) == 1

    def test_substitution_consistency(self):
        tet = [[0, 0, 0], [0, 0, 100], [0, 100, 0], [100, 0, 0]]
        base = orient(tet)
        assert base != 0

        def kept(point):
            count = 0
            for i in range(len(tet)):
                substituted = list(tet)
                substituted[i] = point
                if orient(substituted) == base:
                    count += 1
            return count

        assert kept([5, 5, 5]) == 4
        assert kept([100, 100, 100]) == 3

    @pytest.mark.parametrize("points", [
        [[0, 0], [1, 0]],
        [[0, 0], [1, 0], [0, 1], [1, 1]],
        [[0, 0, 0], [1, 0, 0], [0, 1, 0]],
        [0, 1, 2],
    ])
    def test_wrong_shape(self, points):
        with pytest.raises(ValueError):
            orient(points)

    def test_tolerance(self):
        nearly = [[0, 0], [1, 0], [2, 1e-9]]
        assert orient(nearly) == 1
        assert orient(nearly, rtol=1e-6) == 0

    def test_partial_as_predicate(self):
        coarse = functools.partial(orient, rtol=1e-6)
        sc = SimplicialComplex(2, orient=coarse)
        a, b, c = sc.add([0, 0]), sc.add([10, 0]), sc.add([0, 10])
        s = sc.add([sc.add([a, b]), sc.add([b, c]), sc.add([c, a])])
        assert sc.orient is coarse
        assert s.contains([1, 1])
        # Within tolerance of the edge (a, b)
        assert s.contains([5, -1e-9])
        assert not s.contains([5, -1])
