"""Core types and utilities for polypartition.

This module provides type definitions, enums, exceptions and configuration
used throughout the library.
"""

from .types import (
    Turn,
    PartitionAlgorithm,
)

from .errors import (
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

from .config import (
    EPS,
    PartitionConfig,
)

__all__ = [
    # Enums
    'Turn',
    'PartitionAlgorithm',

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

    # Configuration
    'EPS',
    'PartitionConfig',
]
