"""Polypartition - Convex decomposition of planar polygons.

This library splits simple polygons, optionally with holes, into convex
pieces using either the Hertel-Mehlhorn heuristic or an exact
minimum partition. Polygons are index loops into a shared point table.
"""

__version__ = "0.1.0"

# Facade operations
from .partition import (
    apply,
    apply_hm,
    apply_opt,
    convex_partition,
)

# Partitioning algorithms
from .triangulate import triangulate
from .diagonals import diagonals, is_diagonal
from .hertel_mehlhorn import partition_hm
from .optimal import partition_opt
from .holes import merge_holes, bridge_hole, assign_holes

# Measurements
from .metrics import measure_partition, notch_count, min_parts_bound

# Core types, exceptions and configuration
from .core import (
    Turn,
    PartitionAlgorithm,
    PartitionConfig,
    PolypartitionError,
    ValidationError,
    OrientationError,
    NonSimpleError,
    NestingError,
    TriangulationError,
    HoleBridgeError,
    PartitionError,
    ConfigurationError,
    PartitionWarning,
)

__all__ = [
    '__version__',

    # Facades
    'apply',
    'apply_hm',
    'apply_opt',
    'convex_partition',

    # Algorithms
    'triangulate',
    'diagonals',
    'is_diagonal',
    'partition_hm',
    'partition_opt',
    'merge_holes',
    'bridge_hole',
    'assign_holes',

    # Measurements
    'measure_partition',
    'notch_count',
    'min_parts_bound',

    # Types and configuration
    'Turn',
    'PartitionAlgorithm',
    'PartitionConfig',

    # Exceptions
    'PolypartitionError',
    'ValidationError',
    'OrientationError',
    'NonSimpleError',
    'NestingError',
    'TriangulationError',
    'HoleBridgeError',
    'PartitionError',
    'ConfigurationError',
    'PartitionWarning',
]
