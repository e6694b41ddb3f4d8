"""Functions for merging holes into their outer boundary.

A polygon with holes is turned into one weakly simple loop by cutting a
bridge from each hole to the outer boundary (or to a hole that has already
been bridged). Each bridge is traversed twice, once in each direction, so
the merged loop encloses exactly the original region. Every step builds a
new list; input loops are never modified.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from .core.config import EPS
from .core.errors import HoleBridgeError, NestingError
from .core.geometry_utils import as_point_table, loop_coords, loop_to_polygon
from .diagonals import segment_blocked
from .predicates import in_cone, point_in_polygon, same_point, signed_area

logger = logging.getLogger(__name__)

Bridge = Tuple[int, int, int]


def assign_holes(
    points,
    outer_polys: Sequence[Sequence[int]],
    hole_polys: Sequence[Sequence[int]],
) -> List[List[int]]:
    """Find the outer loop each hole belongs to.

    A hole belongs to the smallest outer loop that contains it, so holes of
    islands nested inside other holes go to the island.

    Args:
        points: Point table
        outer_polys: Outer index loops
        hole_polys: Hole index loops

    Returns:
        For every outer loop, the list of positions in ``hole_polys`` it owns

    Raises:
        NestingError: If a hole lies inside no outer loop

    Examples:
        >>> pts = [(0, 0), (4, 0), (4, 4), (0, 4), (1, 1), (1, 2), (2, 2), (2, 1)]
        >>> assign_holes(pts, [[0, 1, 2, 3]], [[4, 5, 6, 7]])
        [[0]]
    """
    coords = as_point_table(points)
    outer_shapes = [loop_to_polygon(coords, loop) for loop in outer_polys]
    assignment: List[List[int]] = [[] for _ in outer_polys]

    for h, hole in enumerate(hole_polys):
        hole_shape = loop_to_polygon(coords, hole)
        containing = [
            o for o, shape in enumerate(outer_shapes)
            if shape.contains(hole_shape)
        ]
        if not containing:
            raise NestingError(f"Hole {h} is not inside any outer polygon")
        owner = min(containing, key=lambda o: outer_shapes[o].area)
        assignment[owner].append(h)

    return assignment


def _bridge_feasible(
    coords,
    host: List[int],
    holes: List[List[int]],
    r: int,
    hp: int,
    vp: int,
    eps: float,
) -> bool:
    hole = holes[r]
    v = coords[host[vp]]
    h = coords[hole[hp]]
    if same_point(v, h):
        return False

    n_host = len(host)
    n_hole = len(hole)
    if not in_cone(coords[host[(vp - 1) % n_host]], v, coords[host[(vp + 1) % n_host]], h, eps):
        return False
    # Walking a CW hole keeps the region on the left, same as the CCW host.
    if not in_cone(coords[hole[(hp - 1) % n_hole]], h, coords[hole[(hp + 1) % n_hole]], v, eps):
        return False

    if segment_blocked(coords, [host] + holes, h, v, eps):
        return False

    midpoint = ((h[0] + v[0]) / 2.0, (h[1] + v[1]) / 2.0)
    if not point_in_polygon(midpoint, coords, host):
        return False
    return not any(point_in_polygon(midpoint, coords, other) for other in holes)


def find_bridge(
    points,
    host: Sequence[int],
    holes: Sequence[Sequence[int]],
    eps: float = EPS,
) -> Bridge:
    """Pick the shortest feasible bridge from any hole to ``host``.

    Candidates are ranked by Euclidean length, then by hole order, hole
    position and host position, so the choice is deterministic.

    Args:
        points: Point table
        host: CCW host loop (may already contain bridges)
        holes: CW hole loops still to be merged
        eps: Collinearity threshold

    Returns:
        ``(hole, hole_position, host_position)``

    Raises:
        HoleBridgeError: If no hole can be connected to ``host``
    """
    coords = as_point_table(points)
    host = list(host)
    holes = [list(hole) for hole in holes]

    host_coords = loop_coords(coords, host)
    candidates = []
    for r, hole in enumerate(holes):
        dist2 = cdist(loop_coords(coords, hole), host_coords, 'sqeuclidean')
        for hp, vp in np.ndindex(dist2.shape):
            candidates.append((float(dist2[hp, vp]), r, hp, vp))
    candidates.sort()

    for _, r, hp, vp in candidates:
        if _bridge_feasible(coords, host, holes, r, hp, vp, eps):
            return r, hp, vp

    raise HoleBridgeError(
        f"None of {len(holes)} remaining hole(s) can be bridged to the boundary"
    )


def splice_hole(host: Sequence[int], vp: int, hole: Sequence[int], hp: int) -> List[int]:
    """Return a new loop with ``hole`` inserted into ``host`` at the bridge (vp, hp).

    The result runs host up to ``host[vp]``, around the hole starting and
    ending at ``hole[hp]``, back to ``host[vp]`` and on along the host.

    Examples:
        >>> splice_hole([0, 1, 2, 3], 0, [4, 5, 6, 7], 0)
        [0, 4, 5, 6, 7, 4, 0, 1, 2, 3]
    """
    host = list(host)
    hole = list(hole)
    return (
        host[:vp + 1]
        + hole[hp:] + hole[:hp]
        + [hole[hp], host[vp]]
        + host[vp + 1:]
    )


def bridge_hole(
    points,
    host: Sequence[int],
    hole: Sequence[int],
    eps: float = EPS,
) -> List[int]:
    """Merge a single CW hole into a CCW host loop through its shortest feasible bridge."""
    r, hp, vp = find_bridge(points, host, [hole], eps)
    return splice_hole(host, vp, hole, hp)


def _oriented(coords, loop: Sequence[int], ccw: bool) -> List[int]:
    loop = list(loop)
    if (signed_area(coords, loop) > 0) != ccw:
        logger.debug("reversing loop of %d vertices", len(loop))
        loop.reverse()
    return loop


def merge_holes(
    points,
    outer_polys: Sequence[Sequence[int]],
    hole_polys: Sequence[Sequence[int]] = (),
    eps: float = EPS,
    assignment: Optional[Sequence[Sequence[int]]] = None,
) -> List[List[int]]:
    """Merge every hole into its outer loop.

    Outer loops are made CCW and holes CW before bridging. Holes are bridged
    one at a time, always choosing the globally shortest feasible bridge
    among the holes that are left, so a hole hidden behind another one is
    connected once its neighbour has become part of the host.

    Args:
        points: Point table
        outer_polys: Outer index loops
        hole_polys: Hole index loops
        eps: Collinearity threshold
        assignment: Hole positions owned by each outer loop, as returned by
            :func:`assign_holes` (computed when omitted)

    Returns:
        One weakly simple CCW loop per outer loop, in input order

    Raises:
        NestingError: If a hole is outside every outer loop
        HoleBridgeError: If a hole cannot be bridged

    Examples:
        >>> pts = [(0, 0), (4, 0), (4, 4), (0, 4), (1, 1), (1, 2), (2, 2), (2, 1)]
        >>> merge_holes(pts, [[0, 1, 2, 3]], [[4, 5, 6, 7]])
        [[0, 4, 5, 6, 7, 4, 0, 1, 2, 3]]
    """
    coords = as_point_table(points)
    if assignment is None:
        assignment = assign_holes(coords, outer_polys, hole_polys)

    merged: List[List[int]] = []
    for outer, owned in zip(outer_polys, assignment):
        host = _oriented(coords, outer, ccw=True)
        remaining = [_oriented(coords, hole_polys[h], ccw=False) for h in owned]

        while remaining:
            r, hp, vp = find_bridge(coords, host, remaining, eps)
            logger.debug(
                "bridging hole vertex %d to boundary vertex %d",
                remaining[r][hp], host[vp],
            )
            host = splice_hole(host, vp, remaining[r], hp)
            remaining = remaining[:r] + remaining[r + 1:]

        merged.append(host)

    return merged


__all__ = [
    'assign_holes',
    'find_bridge',
    'splice_hole',
    'bridge_hole',
    'merge_holes',
]
