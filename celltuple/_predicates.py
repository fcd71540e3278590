"""
Geometric predicates.

Only orientation is needed by the complexes. The default implementation is
a plain floating point determinant; pass a more robust predicate to
``SimplicialComplex(dim, orient=...)`` where degenerate configurations
matter.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np


def orient(points: Sequence[Sequence[float]], rtol: float = 1e-12) -> int:
    """Orientation of d+1 points in R^d.

    Computes the sign of the determinant of the homogeneous matrix whose
    rows are ``[p_i, 1]``. Determinants smaller than ``rtol`` times the
    product of the row norms are reported as 0 (degenerate).

    :param points: Sequence of d+1 coordinate vectors of length d.
    :param rtol: Relative tolerance below which the orientation is zero.
    :return: 1, -1 or 0.
    """
    P = np.asarray([np.asarray(p, dtype=float) for p in points])
    if P.ndim != 2 or P.shape[0] != P.shape[1] + 1:
        raise ValueError(
            f"Need d+1 points in R^d, got array of shape {P.shape}"
        )
    M = np.hstack([P, np.ones((P.shape[0], 1))])
    det = np.linalg.det(M)
    bound = np.prod(np.linalg.norm(M, axis=1))
    if abs(det) <= rtol * bound:
        return 0
    return 1 if det > 0 else -1
