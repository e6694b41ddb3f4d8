"""Hertel-Mehlhorn convex partitioning.

Triangulate, then greedily remove every triangulation diagonal whose removal
keeps both neighbouring regions convex. Removing a diagonal only widens the
angles at other vertices, so a diagonal that cannot be removed once stays
essential and a single ordered pass gives a complete result. Every remaining
diagonal is essential at a notch, which bounds the part count by four times
the optimum.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .core.config import EPS
from .core.geometry_utils import default_loop
from .predicates import is_straight_or_convex
from .triangulate import Triangle, triangulate

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


def _edge_position(loop: List[int], a: int, b: int) -> int:
    n = len(loop)
    for k in range(n):
        if loop[k] == a and loop[(k + 1) % n] == b:
            return k
    return -1


class RegionArena:
    """Regions addressed by integer id, merged through a union-find.

    Each region starts as one triangle. ``owner`` maps a directed boundary
    edge to the triangle it came from; ``find`` resolves that triangle to the
    region that currently contains it, so merging two regions only touches
    the parent table and the merged loop.
    """

    def __init__(self, triangles: Sequence[Triangle]):
        self.loops: List[Optional[List[int]]] = [list(tri) for tri in triangles]
        self.parent: List[int] = list(range(len(triangles)))
        self.owner: Dict[Edge, int] = {}
        for rid, (a, b, c) in enumerate(triangles):
            for edge in ((a, b), (b, c), (c, a)):
                self.owner[edge] = rid

    def find(self, rid: int) -> int:
        root = rid
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[rid] != root:
            self.parent[rid], rid = root, self.parent[rid]
        return root

    def diagonals(self) -> List[Edge]:
        """Shared edges in increasing ``(min, max)`` order."""
        shared = {
            (a, b) for (a, b) in self.owner
            if a < b and (b, a) in self.owner
        }
        return sorted(shared)

    def try_merge(self, coords, a: int, b: int, eps: float = EPS) -> bool:
        """Merge the regions on both sides of diagonal ``(a, b)`` if the result is convex."""
        r1 = self.find(self.owner[(a, b)])
        r2 = self.find(self.owner[(b, a)])
        if r1 == r2:
            return False

        loop1 = self.loops[r1]
        loop2 = self.loops[r2]
        i = _edge_position(loop1, a, b)
        j = _edge_position(loop2, b, a)
        if i < 0 or j < 0:
            return False

        n1 = len(loop1)
        n2 = len(loop2)
        if not is_straight_or_convex(
            coords[loop1[(i - 1) % n1]], coords[a], coords[loop2[(j + 2) % n2]], eps
        ):
            return False
        if not is_straight_or_convex(
            coords[loop2[(j - 1) % n2]], coords[b], coords[loop1[(i + 2) % n1]], eps
        ):
            return False

        # loop1 rotated to run b .. a, then the rest of loop2 after a.
        merged = loop1[i + 1:] + loop1[:i + 1]
        merged.extend(loop2[(j + 2 + t) % n2] for t in range(n2 - 2))

        self.loops[r1] = merged
        self.loops[r2] = None
        self.parent[r2] = r1
        return True

    def regions(self) -> List[List[int]]:
        """Surviving region loops, each rotated to start at its smallest index."""
        out = []
        for loop in self.loops:
            if loop is None:
                continue
            start = loop.index(min(loop))
            out.append(loop[start:] + loop[:start])
        return out


def partition_hm(
    coords,
    loop: Optional[Sequence[int]] = None,
    eps: float = EPS,
) -> List[List[int]]:
    """Partition a CCW polygon into convex parts with Hertel-Mehlhorn.

    Args:
        coords: Point table
        loop: CCW index loop (default: all points in order); may be a weakly
            simple loop produced by :func:`polypartition.holes.merge_holes`
        eps: Collinearity threshold

    Returns:
        Convex parts as CCW index loops into ``coords``

    Raises:
        TriangulationError: If the loop cannot be triangulated

    Examples:
        >>> partition_hm([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])
        [[0, 1, 2, 3], [0, 3, 4, 5]]
    """
    loop = default_loop(coords, loop)
    triangles = triangulate(coords, loop, eps)
    arena = RegionArena(triangles)

    removed = 0
    for a, b in arena.diagonals():
        if arena.try_merge(coords, a, b, eps):
            removed += 1

    parts = arena.regions()
    logger.debug(
        "hertel-mehlhorn: %d triangles, %d diagonals removed, %d parts",
        len(triangles), removed, len(parts),
    )
    return parts


__all__ = [
    'RegionArena',
    'partition_hm',
]
