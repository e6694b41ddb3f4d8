"""Geometry predicates used by every partitioning stage.

All functions are pure and work on plain ``(x, y)`` pairs (tuples, lists or
rows of a point table). Near-zero cross products are classified as collinear
using an absolute threshold ``eps``; degeneracies never raise.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .core.config import EPS
from .core.types import Turn


def cross(a, b, c) -> float:
    """Z component of (b - a) x (c - b)."""
    return (b[0] - a[0]) * (c[1] - b[1]) - (b[1] - a[1]) * (c[0] - b[0])


def orientation(a, b, c, eps: float = EPS) -> Turn:
    """Classify the turn a -> b -> c.

    Examples:
        >>> orientation((0, 0), (1, 0), (1, 1))
        <Turn.LEFT: 1>
        >>> orientation((0, 0), (1, 0), (2, 0))
        <Turn.COLLINEAR: 0>
    """
    value = cross(a, b, c)
    if value > eps:
        return Turn.LEFT
    if value < -eps:
        return Turn.RIGHT
    return Turn.COLLINEAR


def is_convex_turn(a, b, c, eps: float = EPS) -> bool:
    """True for a strict left turn at b."""
    return cross(a, b, c) > eps


def is_reflex_turn(a, b, c, eps: float = EPS) -> bool:
    """True for a strict right turn at b."""
    return cross(a, b, c) < -eps


def is_straight_or_convex(a, b, c, eps: float = EPS) -> bool:
    """True when the interior angle at b is at most 180 degrees.

    Collinear triples count only when they keep going forward; a collinear
    reversal (a spike) is rejected.
    """
    value = cross(a, b, c)
    if value > eps:
        return True
    if value < -eps:
        return False
    dot = (b[0] - a[0]) * (c[0] - b[0]) + (b[1] - a[1]) * (c[1] - b[1])
    return dot > 0


def is_reflex(coords, loop: Sequence[int], i: int, eps: float = EPS) -> bool:
    """True iff loop position ``i`` is a notch of the CCW ``loop``."""
    n = len(loop)
    prev_pt = coords[loop[(i - 1) % n]]
    pt = coords[loop[i]]
    next_pt = coords[loop[(i + 1) % n]]
    return is_reflex_turn(prev_pt, pt, next_pt, eps)


def signed_area(coords, loop: Sequence[int]) -> float:
    """Shoelace area of ``loop``; positive when CCW."""
    if len(loop) < 3:
        return 0.0
    ring = np.asarray(coords, dtype=float)[np.asarray(loop, dtype=int)]
    x = ring[:, 0]
    y = ring[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def same_point(a, b) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def point_on_segment(p, a, b, eps: float = EPS) -> bool:
    """True when p lies on the closed segment ab."""
    if abs(cross(a, b, p)) > eps:
        return False
    return (
        min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
        and min(a[1], b[1]) <= p[1] <= max(a[1], b[1])
    )


def segments_intersect(p1, p2, p3, p4, proper: bool = True, eps: float = EPS) -> bool:
    """Test whether segment p1p2 meets segment p3p4.

    Args:
        p1, p2: Endpoints of the first segment
        p3, p4: Endpoints of the second segment
        proper: If True (default), only a crossing at a single interior point
            of both segments counts; shared endpoints and touching are ignored
        eps: Collinearity threshold

    Returns:
        True if the segments intersect under the chosen rule

    Examples:
        >>> segments_intersect((0, 0), (2, 2), (0, 2), (2, 0))
        True
        >>> segments_intersect((0, 0), (1, 1), (1, 1), (2, 0))
        False
    """
    o1 = cross(p1, p2, p3)
    o2 = cross(p1, p2, p4)
    o3 = cross(p3, p4, p1)
    o4 = cross(p3, p4, p2)

    if ((o1 > eps and o2 < -eps) or (o1 < -eps and o2 > eps)) and \
            ((o3 > eps and o4 < -eps) or (o3 < -eps and o4 > eps)):
        return True
    if proper:
        return False
    return (
        point_on_segment(p3, p1, p2, eps)
        or point_on_segment(p4, p1, p2, eps)
        or point_on_segment(p1, p3, p4, eps)
        or point_on_segment(p2, p3, p4, eps)
    )


def point_in_triangle(p, a, b, c, eps: float = EPS, strict: bool = True) -> bool:
    """Test p against the CCW triangle abc.

    With ``strict=True`` only the open interior counts; with ``strict=False``
    points on the edges are inside as well.
    """
    d1 = cross(a, b, p)
    d2 = cross(b, c, p)
    d3 = cross(c, a, p)
    if strict:
        return d1 > eps and d2 > eps and d3 > eps
    return d1 >= -eps and d2 >= -eps and d3 >= -eps


def in_cone(prev_pt, vertex, next_pt, p, eps: float = EPS) -> bool:
    """True when p lies in the open interior wedge at ``vertex``.

    The wedge is the interior side of the boundary path prev -> vertex -> next
    of a CCW loop. At a convex vertex p must be left of both edges; at a
    reflex or straight vertex left of either edge is enough.
    """
    if is_convex_turn(prev_pt, vertex, next_pt, eps):
        return is_convex_turn(prev_pt, vertex, p, eps) and is_convex_turn(vertex, next_pt, p, eps)
    return is_convex_turn(prev_pt, vertex, p, eps) or is_convex_turn(vertex, next_pt, p, eps)


def point_in_polygon(p, coords, loop: Sequence[int]) -> bool:
    """Even-odd ray crossing test of p against ``loop``.

    Points exactly on the boundary may go either way.
    """
    px, py = float(p[0]), float(p[1])
    inside = False
    n = len(loop)
    for k in range(n):
        x1, y1 = coords[loop[k]][0], coords[loop[k]][1]
        x2, y2 = coords[loop[(k + 1) % n]][0], coords[loop[(k + 1) % n]][1]
        if (y1 > py) != (y2 > py):
            x_cross = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
            if px < x_cross:
                inside = not inside
    return inside


def is_convex_polygon(coords, loop: Sequence[int], eps: float = EPS) -> bool:
    """True when every turn of ``loop`` has the same sign.

    Collinear vertices are tolerated as long as they do not reverse
    direction. Loops with fewer than 3 vertices are not convex.
    """
    n = len(loop)
    if n < 3:
        return False

    sign = 0
    for k in range(n):
        a = coords[loop[(k - 1) % n]]
        b = coords[loop[k]]
        c = coords[loop[(k + 1) % n]]
        turn = orientation(a, b, c, eps)
        if turn is Turn.COLLINEAR:
            dot = (b[0] - a[0]) * (c[0] - b[0]) + (b[1] - a[1]) * (c[1] - b[1])
            if dot <= 0:
                return False
            continue
        if sign == 0:
            sign = turn.value
        elif turn.value != sign:
            return False
    return sign != 0


__all__ = [
    'cross',
    'orientation',
    'is_convex_turn',
    'is_reflex_turn',
    'is_straight_or_convex',
    'is_reflex',
    'signed_area',
    'same_point',
    'point_on_segment',
    'segments_intersect',
    'point_in_triangle',
    'in_cone',
    'point_in_polygon',
    'is_convex_polygon',
]
