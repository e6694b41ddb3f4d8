"""Common helpers for point tables and index loops.

Every partition routine works on a shared ``(N, 2)`` coordinate table and
integer index loops into it. This module centralizes building that table and
converting loops to shapely geometries.
"""

from typing import List, Optional, Sequence

import numpy as np
from shapely.geometry import LinearRing, Polygon

from .errors import ValidationError


def as_point_table(points) -> np.ndarray:
    """Convert any sequence of 2-D points into a read-only ``(N, 2)`` float array.

    Args:
        points: Sequence of ``(x, y)`` pairs or an ``(N, 2)`` array. Extra
            coordinates (e.g. Z) are dropped.

    Returns:
        Float array of shape ``(N, 2)``

    Raises:
        ValidationError: If the input cannot be read as 2-D points or holds
            non-finite values

    Examples:
        >>> table = as_point_table([(0, 0), (1, 0), (1, 1)])
        >>> table.shape
        (3, 2)
    """
    try:
        coords = np.array(points, dtype=float)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Points are not numeric coordinates: {e}") from e

    if coords.size == 0:
        return np.empty((0, 2), dtype=float)

    if coords.ndim != 2 or coords.shape[1] < 2:
        raise ValidationError(
            f"Points must have shape (N, 2), got {coords.shape}"
        )

    coords = np.ascontiguousarray(coords[:, :2])
    if not np.all(np.isfinite(coords)):
        raise ValidationError("Points contain non-finite coordinates")

    coords.setflags(write=False)
    return coords


def default_loop(coords: np.ndarray, loop: Optional[Sequence[int]] = None) -> List[int]:
    """Return ``loop`` as a list, or the identity loop over all of ``coords``."""
    if loop is None:
        return list(range(len(coords)))
    return [int(i) for i in loop]


def loop_coords(coords: np.ndarray, loop: Sequence[int]) -> np.ndarray:
    """Gather the coordinates of ``loop`` in order (not closed)."""
    return coords[np.asarray(loop, dtype=int)]


def loop_to_ring(coords: np.ndarray, loop: Sequence[int]) -> LinearRing:
    """Build a shapely ``LinearRing`` from an index loop."""
    return LinearRing(loop_coords(coords, loop))


def loop_to_polygon(coords: np.ndarray, loop: Sequence[int]) -> Polygon:
    """Build a shapely ``Polygon`` from an index loop."""
    return Polygon(loop_coords(coords, loop))


def region_to_polygon(
    coords: np.ndarray,
    outer: Sequence[int],
    holes: Sequence[Sequence[int]] = (),
) -> Polygon:
    """Build a shapely ``Polygon`` with holes from index loops."""
    return Polygon(
        loop_coords(coords, outer),
        holes=[loop_coords(coords, hole) for hole in holes],
    )


__all__ = [
    'as_point_table',
    'default_loop',
    'loop_coords',
    'loop_to_ring',
    'loop_to_polygon',
    'region_to_polygon',
]
