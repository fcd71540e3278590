"""Shared complexes for the test suite."""
import collections

import pytest

from celltuple import CellComplex, SimplicialComplex

# Two tetrahedra glued on the triangle (p1, p2, p3)
EDGES = [(0, 1), (0, 2), (0, 3),
         (1, 2), (2, 3), (3, 1),
         (1, 4), (4, 2), (4, 3)]
FACES = [(0, 1, 3), (0, 2, 5), (1, 2, 4),
         (3, 4, 5),
         (6, 7, 3), (7, 8, 4), (8, 6, 5)]
TETS = [(0, 1, 2, 3), (3, 4, 5, 6)]
POINTS = [(0, 0, 0), (0, 0, 100), (0, 100, 0), (100, 0, 0), (100, 100, 100)]


def build_double_tetrahedron(complex, points=None):
    """Add the double tetrahedron to complex, return (p, e, f, t)"""
    if points is None:
        p = [complex.add() for _ in range(5)]
    else:
        p = [complex.add(x) for x in points]
    e = [complex.add([p[a], p[b]]) for a, b in EDGES]
    f = [complex.add([e[i] for i in tri]) for tri in FACES]
    t = [complex.add([f[i] for i in tet]) for tet in TETS]
    return p, e, f, t


def build_tetrahedron(points):
    sc = SimplicialComplex(3)
    p = [sc.add(x) for x in points]
    e = [sc.add([p[a], p[b]])
         for a, b in [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]]
    f = [sc.add([e[a], e[b], e[c]])
         for a, b, c in [(0, 1, 3), (0, 2, 4), (1, 2, 5), (3, 4, 5)]]
    sc.add(f)
    return sc


def build_grid(k, spacing=10):
    """Triangulated k x k grid of squares, each split along its diagonal"""
    sc = SimplicialComplex(2)
    p, e = {}, {}
    for i in range(k + 1):
        for j in range(k + 1):
            p[i, j] = sc.add([i * spacing, j * spacing])
    for i in range(k):
        e[i, k, 0] = sc.add([p[i, k], p[i + 1, k]])
        e[k, i, 1] = sc.add([p[k, i], p[k, i + 1]])
    for i in range(k):
        for j in range(k):
            e[i, j, 0] = sc.add([p[i, j], p[i + 1, j]])
            e[i, j, 1] = sc.add([p[i, j], p[i, j + 1]])
            e[i, j, 2] = sc.add([p[i, j], p[i + 1, j + 1]])
    for i in range(k):
        for j in range(k):
            sc.add([e[i, j, 0], e[i, j, 2], e[i + 1, j, 1]])
            sc.add([e[i, j, 1], e[i, j, 2], e[i, j + 1, 0]])
    return sc


def all_cells(complex):
    cells = [complex.empty_face, complex.full_face]
    for bucket in complex.cells:
        cells.extend(bucket)
    return cells


def all_tuples(complex):
    """Every flag of a complex connected to complex.tuple() by switches"""
    start = complex.tuple()
    seen = {start}
    queue = collections.deque([start])
    while queue:
        t = queue.popleft()
        for k in range(complex.dim + 1):
            s = complex.switch(k, t)
            if s is not None and s not in seen:
                seen.add(s)
                queue.append(s)
    return seen


def incidence(complex):
    """Cell lists and every up/down list, order included"""
    return ([list(cells) for cells in complex.cells],
            {c: (complex.down(c), complex.up(c)) for c in all_cells(complex)})


@pytest.fixture
def cc():
    return CellComplex(3)


@pytest.fixture
def double_tet(cc):
    p, e, f, t = build_double_tetrahedron(cc)
    return cc, p, e, f, t


@pytest.fixture
def sc_double_tet():
    sc = SimplicialComplex(3)
    p, e, f, t = build_double_tetrahedron(sc, POINTS)
    return sc, p, e, f, t
