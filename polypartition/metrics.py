"""Measurement helpers for partition results.

These turn index parts back into shapely polygons and report the handful of
numbers needed to judge a partition: how many parts, whether they cover the
region exactly, whether any of them overlap and whether each one is convex.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Sequence, Union

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from .core.config import EPS
from .core.geometry_utils import as_point_table, loop_to_polygon
from .predicates import is_convex_polygon, is_reflex


def parts_to_polygons(points, parts: Sequence[Sequence[int]]) -> List[Polygon]:
    """Convert index parts into shapely polygons."""
    coords = as_point_table(points)
    return [loop_to_polygon(coords, part) for part in parts]


def total_overlap_area(parts: Iterable[BaseGeometry]) -> float:
    """Area covered by more than one part.

    A valid partition has parts that only share edges, so this is 0 up to
    rounding. Empty parts are ignored.

    Examples:
        >>> a = Polygon([(0, 0), (2, 0), (2, 1), (0, 1)])
        >>> b = Polygon([(1, 0), (3, 0), (3, 1), (1, 1)])
        >>> total_overlap_area([a, b])
        1.0
    """
    shapes = [part for part in parts if part is not None and not part.is_empty]
    if len(shapes) < 2:
        return 0.0
    return sum(shape.area for shape in shapes) - unary_union(shapes).area


def measure_partition(
    points,
    parts: Sequence[Sequence[int]],
    region: Optional[BaseGeometry] = None,
    eps: float = EPS,
) -> Dict[str, Union[int, float, bool, None]]:
    """Return core metrics for a partition result.

    Args:
        points: Point table the parts index into
        parts: Convex parts as index loops
        region: Optional shapely geometry of the partitioned input, used for
            the area ratio
        eps: Collinearity threshold for the convexity check

    Returns:
        Dict with ``part_count``, ``area``, ``region_area``, ``area_ratio``,
        ``overlap_area`` and ``all_convex``

    Examples:
        >>> pts = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
        >>> stats = measure_partition(pts, [[0, 1, 2, 3], [0, 3, 4, 5]])
        >>> stats["part_count"], stats["area"]
        (2, 3.0)
    """
    coords = as_point_table(points)
    polygons = [loop_to_polygon(coords, part) for part in parts]
    area = sum(polygon.area for polygon in polygons)

    region_area = getattr(region, "area", None) if region is not None else None
    area_ratio: Optional[float] = None
    if region_area:
        area_ratio = area / region_area

    return {
        "part_count": len(polygons),
        "area": area,
        "region_area": region_area,
        "area_ratio": area_ratio,
        "overlap_area": total_overlap_area(polygons),
        "all_convex": all(is_convex_polygon(coords, part, eps) for part in parts),
    }


def notch_count(points, loop: Optional[Sequence[int]] = None, eps: float = EPS) -> int:
    """Count the reflex vertices of a CCW loop."""
    coords = as_point_table(points)
    if loop is None:
        loop = range(len(coords))
    loop = list(loop)
    return sum(1 for i in range(len(loop)) if is_reflex(coords, loop, i, eps))


def min_parts_bound(points, loop: Optional[Sequence[int]] = None, eps: float = EPS) -> int:
    """Lower bound on the number of convex parts: ``ceil(r / 2) + 1``."""
    r = notch_count(points, loop, eps)
    return math.ceil(r / 2) + 1


__all__ = [
    "parts_to_polygons",
    "total_overlap_area",
    "measure_partition",
    "notch_count",
    "min_parts_bound",
]
