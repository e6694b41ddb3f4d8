"""Spatial indexing helpers.

Used to find crossing loops and overlapping regions among the input
polygons without testing every pair.
"""

from typing import Callable, List, Optional, Sequence, Set, Tuple

from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree


def find_geometry_pairs(
    geometries: Sequence[BaseGeometry],
    predicate: str = 'intersects',
    validate_func: Optional[Callable[[BaseGeometry, BaseGeometry], bool]] = None,
) -> List[Tuple[int, int]]:
    """Find pairs of geometries that satisfy a spatial predicate.

    Uses STRtree for the candidate search. Returns unique pairs (i, j) where
    i < j, in increasing order.

    Args:
        geometries: Geometries to search
        predicate: Shapely spatial predicate ('intersects', 'overlaps', ...)
        validate_func: Optional function (geom_i, geom_j) -> bool for an
            additional exact check

    Returns:
        List of (index_i, index_j) tuples

    Examples:
        >>> rings = [loop_to_ring(coords, loop) for loop in loops]
        >>> crossing = find_geometry_pairs(rings)
    """
    if not geometries:
        return []

    tree = STRtree(list(geometries))
    pairs: Set[Tuple[int, int]] = set()

    for i, geom_i in enumerate(geometries):
        for j in tree.query(geom_i, predicate=predicate):
            j = int(j)
            if j <= i:
                continue
            if validate_func is None or validate_func(geom_i, geometries[j]):
                pairs.add((i, j))

    return sorted(pairs)


__all__ = [
    'find_geometry_pairs',
]
