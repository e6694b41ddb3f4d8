"""Type definitions for polypartition operations.

This module defines enums for turn classification and algorithm selection.
"""

from enum import Enum


class Turn(Enum):
    """Direction of the turn a -> b -> c.

    Attributes:
        LEFT: Counter-clockwise turn (positive cross product)
        RIGHT: Clockwise turn (negative cross product)
        COLLINEAR: Cross product within the collinearity threshold

    Examples:
        >>> from polypartition.predicates import orientation
        >>> orientation((0, 0), (1, 0), (1, 1)) is Turn.LEFT
        True
    """
    LEFT = 1
    RIGHT = -1
    COLLINEAR = 0


class PartitionAlgorithm(Enum):
    """Algorithm used for convex partitioning.

    Attributes:
        HM: Hertel-Mehlhorn (triangulate then merge, at most 4x optimal, O(n^2))
        OPT: Exact dynamic program over diagonals (minimum number of parts)

    Examples:
        >>> from polypartition import convex_partition, PartitionAlgorithm
        >>> parts = convex_partition(points, [loop], algorithm=PartitionAlgorithm.OPT)
    """
    HM = 'hm'
    OPT = 'opt'


__all__ = [
    'Turn',
    'PartitionAlgorithm',
]
