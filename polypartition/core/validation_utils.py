"""Input validation for partition operations.

Every check raises a :class:`ValidationError` subclass describing the first
problem found; nothing is repaired silently.
"""

from typing import List, Sequence

import numpy as np
from shapely.validation import explain_validity

from ..predicates import signed_area
from .config import EPS
from .errors import NestingError, NonSimpleError, OrientationError, ValidationError
from .geometry_utils import loop_to_polygon, loop_to_ring, region_to_polygon
from .spatial_utils import find_geometry_pairs


def has_minimum_vertices(loop: Sequence[int], min_vertices: int = 3) -> bool:
    """Check if a loop has at least ``min_vertices`` vertices."""
    return len(loop) >= min_vertices


def has_duplicate_vertices(
    coords: np.ndarray,
    loop: Sequence[int],
    tolerance: float = 0.0,
) -> bool:
    """Check if a closed loop has consecutive coincident vertices.

    The closing pair (last, first) is checked as well.

    Examples:
        >>> coords = np.array([[0, 0], [0, 0], [1, 1]])
        >>> has_duplicate_vertices(coords, [0, 1, 2])
        True
    """
    if len(loop) < 2:
        return False

    ring = coords[np.asarray(loop, dtype=int)]
    steps = np.linalg.norm(ring - np.roll(ring, -1, axis=0), axis=1)
    return bool(np.any(steps <= tolerance))


def validate_indices(
    coords: np.ndarray,
    loop: Sequence[int],
    name: str = "polygon",
) -> List[int]:
    """Check that ``loop`` is a well-formed index loop into ``coords``.

    Returns:
        The loop as a list of ints

    Raises:
        ValidationError: On fewer than 3 vertices, non-integer, out-of-range
            or repeated indices, or coincident consecutive points
    """
    try:
        indices = [int(i) for i in loop]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: indices must be integers ({e})") from e

    if any(float(i) != float(raw) for i, raw in zip(indices, loop)):
        raise ValidationError(f"{name}: indices must be integers")

    if not has_minimum_vertices(indices):
        raise ValidationError(f"{name}: needs at least 3 vertices, got {len(indices)}")

    for i in indices:
        if i < 0 or i >= len(coords):
            raise ValidationError(
                f"{name}: index {i} is out of range for {len(coords)} points"
            )

    if len(set(indices)) != len(indices):
        raise ValidationError(f"{name}: repeated vertex index")

    if has_duplicate_vertices(coords, indices):
        raise ValidationError(f"{name}: consecutive vertices coincide")

    return indices


def check_simple(coords: np.ndarray, loop: Sequence[int], name: str = "polygon") -> None:
    """Raise :class:`NonSimpleError` if the loop intersects itself."""
    ring = loop_to_ring(coords, loop)
    if ring.is_simple:
        return
    reason = explain_validity(loop_to_polygon(coords, loop))
    raise NonSimpleError(f"{name}: boundary is not simple ({reason})")


def check_orientation(
    coords: np.ndarray,
    loop: Sequence[int],
    ccw: bool = True,
    name: str = "polygon",
    eps: float = EPS,
) -> float:
    """Check the winding of ``loop``.

    Returns:
        The signed area

    Raises:
        OrientationError: If the area is zero or the winding is wrong
    """
    area = signed_area(coords, loop)
    if abs(area) <= eps:
        raise OrientationError(f"{name}: loop has zero area")
    if (area > 0) != ccw:
        expected = "counter-clockwise" if ccw else "clockwise"
        raise OrientationError(f"{name}: vertices must be in {expected} order")
    return area


def validate_loop(
    coords: np.ndarray,
    loop: Sequence[int],
    hole: bool = False,
    check_simplicity: bool = True,
    name: str = "polygon",
    eps: float = EPS,
) -> List[int]:
    """Run every single-loop check: indices, simplicity, orientation."""
    indices = validate_indices(coords, loop, name)
    if check_simplicity:
        check_simple(coords, indices, name)
    check_orientation(coords, indices, ccw=not hole, name=name, eps=eps)
    return indices


def check_nesting(
    coords: np.ndarray,
    polys: Sequence[Sequence[int]],
    holes: Sequence[Sequence[int]],
    assignment: Sequence[Sequence[int]],
) -> None:
    """Check how the loops sit relative to each other.

    Args:
        coords: Point table
        polys: Outer loops
        holes: Hole loops
        assignment: For every outer loop, the positions in ``holes`` it owns

    Raises:
        NestingError: If two loops touch or cross, two holes of the same
            outer loop are nested, or two regions overlap
    """
    loops = list(polys) + list(holes)
    rings = [loop_to_ring(coords, loop) for loop in loops]
    touching = find_geometry_pairs(rings)
    if touching:
        a, b = touching[0]
        raise NestingError(f"Loops {a} and {b} touch or cross")

    for owned in assignment:
        shapes = [loop_to_polygon(coords, holes[h]) for h in owned]
        nested = find_geometry_pairs(shapes)
        if nested:
            a, b = nested[0]
            raise NestingError(f"Holes {owned[a]} and {owned[b]} are nested")

    regions = [
        region_to_polygon(coords, outer, [holes[h] for h in owned])
        for outer, owned in zip(polys, assignment)
    ]
    overlapping = find_geometry_pairs(
        regions,
        validate_func=lambda r1, r2: r1.intersection(r2).area > 0,
    )
    if overlapping:
        a, b = overlapping[0]
        raise NestingError(f"Polygons {a} and {b} overlap")


__all__ = [
    'has_minimum_vertices',
    'has_duplicate_vertices',
    'validate_indices',
    'check_simple',
    'check_orientation',
    'validate_loop',
    'check_nesting',
]
