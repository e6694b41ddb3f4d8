"""Internal diagonal (visibility) detection for simple polygons.

A pair of loop positions forms a diagonal when the open segment between them
stays strictly inside the polygon. Checking only for edge crossings is not
enough: a segment can avoid every edge and still run outside through a
concavity, so the interior wedge at both endpoints and the midpoint are
tested as well.
"""

from __future__ import annotations

from typing import Optional, Sequence, Set, Tuple

import numpy as np

from .core.config import EPS
from .core.geometry_utils import default_loop
from .predicates import (
    in_cone,
    point_in_polygon,
    point_on_segment,
    same_point,
    segments_intersect,
)


def segment_blocked(coords, loops: Sequence[Sequence[int]], p, q, eps: float = EPS) -> bool:
    """True if segment pq crosses an edge of ``loops`` or runs through a vertex."""
    for loop in loops:
        n = len(loop)
        for k in range(n):
            a = coords[loop[k]]
            b = coords[loop[(k + 1) % n]]
            if segments_intersect(p, q, a, b, proper=True, eps=eps):
                return True
            if same_point(a, p) or same_point(a, q):
                continue
            if point_on_segment(a, p, q, eps):
                return True
    return False


def is_diagonal(
    coords,
    loop: Sequence[int],
    i: int,
    j: int,
    eps: float = EPS,
) -> bool:
    """Check whether loop positions ``i`` and ``j`` form an internal diagonal.

    Args:
        coords: Point table
        loop: CCW index loop
        i, j: Positions in ``loop`` (not point indices)
        eps: Collinearity threshold

    Returns:
        True when the open segment lies strictly inside the polygon
    """
    n = len(loop)
    if i == j or (j - i) % n in (1, n - 1):
        return False

    p = coords[loop[i]]
    q = coords[loop[j]]
    if same_point(p, q):
        return False

    if not in_cone(coords[loop[(i - 1) % n]], p, coords[loop[(i + 1) % n]], q, eps):
        return False
    if not in_cone(coords[loop[(j - 1) % n]], q, coords[loop[(j + 1) % n]], p, eps):
        return False

    if segment_blocked(coords, [loop], p, q, eps):
        return False

    midpoint = ((p[0] + q[0]) / 2.0, (p[1] + q[1]) / 2.0)
    return point_in_polygon(midpoint, coords, loop)


def diagonals(
    coords,
    loop: Optional[Sequence[int]] = None,
    eps: float = EPS,
) -> Set[Tuple[int, int]]:
    """Enumerate every internal diagonal of a CCW simple polygon.

    Returns:
        Set of position pairs ``(i, j)`` with ``i < j``

    Examples:
        >>> sorted(diagonals([(0, 0), (1, 0), (1, 1), (0, 1)]))
        [(0, 2), (1, 3)]
    """
    loop = default_loop(coords, loop)
    n = len(loop)
    found: Set[Tuple[int, int]] = set()
    for i in range(n):
        for j in range(i + 2, n):
            if is_diagonal(coords, loop, i, j, eps):
                found.add((i, j))
    return found


def visibility_table(
    coords,
    loop: Optional[Sequence[int]] = None,
    eps: float = EPS,
) -> np.ndarray:
    """Symmetric ``(n, n)`` boolean table: boundary edges and diagonals are True."""
    loop = default_loop(coords, loop)
    n = len(loop)
    visible = np.zeros((n, n), dtype=bool)
    for i in range(n):
        visible[i, (i + 1) % n] = True
        visible[(i + 1) % n, i] = True
    for i, j in diagonals(coords, loop, eps):
        visible[i, j] = True
        visible[j, i] = True
    return visible


__all__ = [
    'segment_blocked',
    'is_diagonal',
    'diagonals',
    'visibility_table',
]
