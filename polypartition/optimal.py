"""Minimum convex partition by dynamic programming over diagonals.

States are keyed by pairs of loop positions ``(i, k)`` with ``i < k`` joined
by a boundary edge or a diagonal. ``count[i][k]`` is the minimum number of
convex parts covering the sub-polygon ``i, i + 1, ..., k`` closed by
``(k, i)``. The part that touches ``(k, i)`` is a convex polygon
``i = v0 < v1 < ... < vm = k`` whose sides are edges or diagonals, so

    count[i][k] = 1 + min(sum(count[v_t][v_t+1]))

over every such convex chain. For a fixed ``i`` the chains are grown one
vertex at a time, keyed by their last side ``(p, c)`` and their first vertex
``v1``, since the angle at ``i`` is only known once the chain is closed.

Straight angles (collinear vertices) are allowed inside a part as long as
the boundary keeps going forward. Every state is treated alike, so the
result does not depend on where the loop starts.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .core.config import EPS
from .core.errors import PartitionError
from .core.geometry_utils import default_loop
from .diagonals import visibility_table
from .predicates import is_convex_polygon, is_straight_or_convex

logger = logging.getLogger(__name__)

INFINITE_WEIGHT = 2 ** 31 - 1

# (cost, previous position) per first vertex of the chain
ChainStates = Dict[int, Tuple[int, Optional[int]]]


class DPTable:
    """Part counts, visibility and chain states for every ``(i, k)`` state."""

    def __init__(self, coords, loop: Sequence[int], eps: float = EPS):
        self.loop = list(loop)
        self.eps = eps
        n = len(self.loop)
        self.n = n
        self.points = [(float(coords[v][0]), float(coords[v][1])) for v in self.loop]

        self.visible = visibility_table(coords, self.loop, eps)
        self.count: List[List[int]] = [
            [0 if k == i + 1 else INFINITE_WEIGHT for k in range(n)]
            for i in range(n)
        ]
        self.closing: Dict[Tuple[int, int], Tuple[int, int]] = {}
        self.chains: List[Dict[Tuple[int, int], ChainStates]] = [{} for _ in range(n)]

    def turn_ok(self, a: int, b: int, c: int) -> bool:
        """Interior angle at position b is at most 180 degrees."""
        pts = self.points
        return is_straight_or_convex(pts[a], pts[b], pts[c], self.eps)

    def side_ok(self, a: int, b: int) -> bool:
        return (b == a + 1 or self.visible[a, b]) and self.count[a][b] < INFINITE_WEIGHT

    def solve(self) -> None:
        for i in range(self.n - 3, -1, -1):
            self._solve_from(i)

    def _solve_from(self, i: int) -> None:
        chains = self.chains[i]
        ending: Dict[int, List[int]] = {}

        for c in range(i + 1, self.n):
            ends = ending.setdefault(c, [])

            for p in range(i + 1, c):
                if not ending[p] or not self.side_ok(p, c):
                    continue
                step = self.count[p][c]
                target: ChainStates = {}
                for pp in ending[p]:
                    if not self.turn_ok(pp, p, c):
                        continue
                    for v1, (cost, _) in chains[(pp, p)].items():
                        total = cost + step
                        if v1 not in target or total < target[v1][0]:
                            target[v1] = (total, pp)
                if target:
                    chains[(p, c)] = target
                    ends.append(p)

            if c > i + 1 and self.visible[i, c]:
                best: Optional[Tuple[int, int, int]] = None
                for p in ends:
                    if not self.turn_ok(p, c, i):
                        continue
                    for v1, (cost, _) in chains[(p, c)].items():
                        if (best is None or cost < best[0]) and self.turn_ok(c, i, v1):
                            best = (cost, v1, p)
                if best is not None:
                    self.count[i][c] = best[0] + 1
                    self.closing[(i, c)] = (best[1], best[2])

            if self.side_ok(i, c):
                chains[(i, c)] = {c: (self.count[i][c], None)}
                ends.append(i)

    def part(self, i: int, k: int) -> List[int]:
        """Positions of the part closing state ``(i, k)``, in loop order."""
        try:
            v1, p = self.closing[(i, k)]
        except KeyError:
            raise PartitionError(f"No decomposition recorded for state ({i}, {k})") from None

        chains = self.chains[i]
        positions = [k]
        c = k
        while p is not None:
            positions.append(p)
            p, c = chains[(p, c)][v1][1], p
        positions.reverse()
        return positions

    def reconstruct(self) -> List[List[int]]:
        parts: List[List[int]] = []
        stack = [(0, self.n - 1)]
        while stack:
            i, k = stack.pop()
            if k - i <= 1:
                continue
            positions = self.part(i, k)
            parts.append([self.loop[p] for p in positions])
            stack.extend(reversed(list(zip(positions, positions[1:]))))
        return parts


def partition_opt(
    coords,
    loop: Optional[Sequence[int]] = None,
    eps: float = EPS,
) -> List[List[int]]:
    """Partition a CCW simple polygon into the minimum number of convex parts.

    Args:
        coords: Point table
        loop: CCW index loop without repeated indices (default: all points)
        eps: Collinearity threshold

    Returns:
        Convex parts as CCW index loops into ``coords``

    Raises:
        PartitionError: If the loop has fewer than 3 vertices, the diagonal
            graph leaves part of the polygon unresolved, or a part fails the
            convexity check (invalid input)

    Examples:
        >>> partition_opt([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])
        [[0, 3, 4, 5], [0, 1, 2, 3]]
    """
    loop = default_loop(coords, loop)
    if len(loop) < 3:
        raise PartitionError(f"Cannot partition a loop with {len(loop)} vertices")
    if is_convex_polygon(coords, loop, eps):
        return [list(loop)]

    table = DPTable(coords, loop, eps)
    table.solve()
    if table.count[0][table.n - 1] >= INFINITE_WEIGHT:
        raise PartitionError("No convex decomposition found; polygon is not simple")

    parts = table.reconstruct()
    for part in parts:
        if not is_convex_polygon(coords, part, eps):
            raise PartitionError(f"Decomposition produced a non-convex part {part}")

    logger.debug("optimal: %d vertices, %d parts", table.n, len(parts))
    return parts


__all__ = [
    'INFINITE_WEIGHT',
    'DPTable',
    'partition_opt',
]
