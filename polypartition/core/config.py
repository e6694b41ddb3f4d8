"""Settings shared by the partition facades."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

EPS = 1e-12


@dataclass
class PartitionConfig:
    """Knobs for the ``apply*`` facades.

    Attributes:
        eps: Cross products with magnitude at or below this are collinear
        max_opt_vertices: Above this vertex count ``apply_opt`` falls back to
            Hertel-Mehlhorn (None = no ceiling)
        raise_on_failure: Re-raise the underlying error instead of returning
            ``(False, [])``
        check_simplicity: Run the shapely self-intersection check on every loop
    """

    eps: float = EPS
    max_opt_vertices: Optional[int] = None
    raise_on_failure: bool = False
    check_simplicity: bool = True

    def validate(self) -> "PartitionConfig":
        if self.eps < 0:
            raise ConfigurationError(f"eps must be non-negative, got {self.eps}")
        if self.max_opt_vertices is not None and self.max_opt_vertices < 3:
            raise ConfigurationError(
                f"max_opt_vertices must be at least 3, got {self.max_opt_vertices}"
            )
        return self


__all__ = [
    "EPS",
    "PartitionConfig",
]
