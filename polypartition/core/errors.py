"""Exception hierarchy for polypartition.

Internal operations raise these; the ``apply*`` facades turn them into a
``(False, [])`` result and a :class:`PartitionWarning`.
"""


class PolypartitionError(Exception):
    """Base class for all polypartition errors."""
    pass


class ValidationError(PolypartitionError):
    """Raised when input polygons are malformed.

    Covers loops with fewer than 3 vertices, repeated or out-of-range
    indices, coincident consecutive points and non-finite coordinates.
    """
    pass


class OrientationError(ValidationError):
    """Raised when an outer loop is not CCW or a hole is not CW."""
    pass


class NonSimpleError(ValidationError):
    """Raised when a loop intersects itself."""
    pass


class NestingError(ValidationError):
    """Raised when loops cross each other or holes are not properly nested."""
    pass


class TriangulationError(PolypartitionError):
    """Raised when ear clipping cannot find an ear."""
    pass


class HoleBridgeError(PolypartitionError):
    """Raised when a hole cannot be bridged to any host boundary."""
    pass


class PartitionError(PolypartitionError):
    """Raised when the optimal partition cannot be reconstructed."""
    pass


class ConfigurationError(PolypartitionError):
    """Raised when a :class:`PartitionConfig` holds invalid settings."""
    pass


class PartitionWarning(UserWarning):
    """Warning emitted when a facade operation rejects its input."""

    def __init__(self, message: str, operation: str = "", cause: Exception = None):
        super().__init__(message)
        self.operation = operation
        self.cause = cause


__all__ = [
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
