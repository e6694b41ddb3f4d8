"""Ear-clipping triangulation of simple polygons.

The triangulator is the first stage of the Hertel-Mehlhorn partitioner. It
also accepts the weakly simple loops produced by the hole merger, where the
two endpoints of every bridge appear twice.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .core.config import EPS
from .core.errors import TriangulationError
from .core.geometry_utils import default_loop
from .predicates import is_convex_turn, point_in_triangle, same_point

logger = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]


def _is_ear(coords, loop: List[int], working: List[int], k: int, eps: float) -> bool:
    m = len(working)
    prev_pos = working[(k - 1) % m]
    pos = working[k]
    next_pos = working[(k + 1) % m]
    a = coords[loop[prev_pos]]
    b = coords[loop[pos]]
    c = coords[loop[next_pos]]

    if not is_convex_turn(a, b, c, eps):
        return False

    for other in working:
        if other in (prev_pos, pos, next_pos):
            continue
        p = coords[loop[other]]
        # Duplicated bridge endpoints sit on the corners.
        if same_point(p, a) or same_point(p, b) or same_point(p, c):
            continue
        if point_in_triangle(p, a, b, c, eps, strict=False):
            return False
    return True


def triangulate(
    coords,
    loop: Optional[Sequence[int]] = None,
    eps: float = EPS,
) -> List[Triangle]:
    """Triangulate a CCW simple polygon by ear clipping.

    Candidate ears are scanned in loop order and the first valid one is
    clipped, so the result is deterministic.

    Args:
        coords: Point table (``(N, 2)`` array or sequence of pairs)
        loop: CCW index loop into ``coords`` (default: all points in order)
        eps: Collinearity threshold

    Returns:
        List of CCW index triples, ``len(loop) - 2`` of them

    Raises:
        TriangulationError: If the loop has fewer than 3 vertices or no ear
            can be found (non-simple or clockwise input)

    Examples:
        >>> triangulate([(0, 0), (1, 0), (1, 1), (0, 1)])
        [(3, 0, 1), (1, 2, 3)]
    """
    loop = default_loop(coords, loop)
    if len(loop) < 3:
        raise TriangulationError(
            f"Cannot triangulate a loop with {len(loop)} vertices"
        )

    working = list(range(len(loop)))
    triangles: List[Triangle] = []

    while len(working) > 3:
        for k in range(len(working)):
            if _is_ear(coords, loop, working, k, eps):
                m = len(working)
                triangles.append((
                    loop[working[(k - 1) % m]],
                    loop[working[k]],
                    loop[working[(k + 1) % m]],
                ))
                del working[k]
                break
        else:
            raise TriangulationError(
                f"No ear found with {len(working)} vertices left; "
                "polygon is not simple or not counter-clockwise"
            )

    triangles.append((loop[working[0]], loop[working[1]], loop[working[2]]))
    logger.debug("triangulated %d vertices into %d triangles", len(loop), len(triangles))
    return triangles


__all__ = [
    'Triangle',
    'triangulate',
]
