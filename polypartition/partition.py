"""High-level convex partition operations.

The ``apply*`` functions mirror a boolean contract: they return
``(ok, parts)`` where ``parts`` is a list of convex index loops. Invalid input
never raises from these functions unless ``PartitionConfig.raise_on_failure``
is set; a :class:`PartitionWarning` describes what went wrong instead.

:func:`convex_partition` is the raising counterpart used when the caller
prefers exceptions.
"""

from __future__ import annotations

import logging
import warnings
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .core.config import PartitionConfig
from .core.errors import ConfigurationError, PartitionWarning, PolypartitionError
from .core.geometry_utils import as_point_table
from .core.types import PartitionAlgorithm
from .core.validation_utils import check_nesting, validate_loop
from .hertel_mehlhorn import partition_hm
from .holes import assign_holes, merge_holes
from .optimal import partition_opt

logger = logging.getLogger(__name__)

Parts = List[List[int]]
Result = Tuple[bool, Parts]


def _resolve_config(config: Optional[PartitionConfig]) -> PartitionConfig:
    if config is None:
        return PartitionConfig()
    return config.validate()


def _run(operation: str, func: Callable[[], Parts], config: PartitionConfig) -> Result:
    try:
        parts = func()
    except PolypartitionError as e:
        if config.raise_on_failure:
            raise
        warnings.warn(
            PartitionWarning(f"{operation} failed: {e}", operation=operation, cause=e),
            stacklevel=3,
        )
        return False, []
    return True, parts


def _validated_loops(
    coords: np.ndarray,
    loops: Sequence[Sequence[int]],
    config: PartitionConfig,
    hole: bool = False,
) -> Parts:
    kind = "hole" if hole else "polygon"
    return [
        validate_loop(
            coords,
            loop,
            hole=hole,
            check_simplicity=config.check_simplicity,
            name=f"{kind} {i}",
            eps=config.eps,
        )
        for i, loop in enumerate(loops)
    ]


def _partition_single(coords: np.ndarray, algorithm: PartitionAlgorithm, config: PartitionConfig) -> Parts:
    loop = validate_loop(
        coords,
        range(len(coords)),
        check_simplicity=config.check_simplicity,
        eps=config.eps,
    )
    return _partition_loop(coords, loop, algorithm, config)


def _partition_loop(
    coords: np.ndarray,
    loop: List[int],
    algorithm: PartitionAlgorithm,
    config: PartitionConfig,
) -> Parts:
    if algorithm is PartitionAlgorithm.OPT:
        limit = config.max_opt_vertices
        if limit is not None and len(loop) > limit:
            logger.info(
                "polygon has %d vertices (limit %d), using Hertel-Mehlhorn",
                len(loop), limit,
            )
            return partition_hm(coords, loop, config.eps)
        return partition_opt(coords, loop, config.eps)
    return partition_hm(coords, loop, config.eps)


def apply_opt(poly, config: Optional[PartitionConfig] = None) -> Result:
    """Partition a simple polygon into the minimum number of convex parts.

    Args:
        poly: CCW sequence of ``(x, y)`` points (closing point not repeated)
        config: Optional settings

    Returns:
        ``(ok, parts)``; each part is a list of indices into ``poly``

    Examples:
        >>> ok, parts = apply_opt([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])
        >>> ok, len(parts)
        (True, 2)
    """
    config = _resolve_config(config)
    return _run(
        "apply_opt",
        lambda: _partition_single(as_point_table(poly), PartitionAlgorithm.OPT, config),
        config,
    )


def apply_hm(poly, config: Optional[PartitionConfig] = None) -> Result:
    """Partition a simple polygon with the Hertel-Mehlhorn heuristic.

    Uses at most four times as many parts as the optimum.

    Args:
        poly: CCW sequence of ``(x, y)`` points (closing point not repeated)
        config: Optional settings

    Returns:
        ``(ok, parts)``; each part is a list of indices into ``poly``
    """
    config = _resolve_config(config)
    return _run(
        "apply_hm",
        lambda: _partition_single(as_point_table(poly), PartitionAlgorithm.HM, config),
        config,
    )


def convex_partition(
    points,
    polys: Sequence[Sequence[int]],
    holes: Sequence[Sequence[int]] = (),
    algorithm: Union[PartitionAlgorithm, str] = PartitionAlgorithm.HM,
    config: Optional[PartitionConfig] = None,
) -> Parts:
    """Partition polygons with holes into convex parts, raising on failure.

    Every loop is validated, holes are assigned to their outer polygon and
    bridged into it, and each merged boundary is partitioned.

    Args:
        points: Shared point table, any sequence of ``(x, y)`` pairs
        polys: Outer loops, CCW index lists into ``points``
        holes: Hole loops, CW index lists into ``points``
        algorithm: ``PartitionAlgorithm.HM`` or ``PartitionAlgorithm.OPT``
            (OPT only accepts hole-free input)
        config: Optional settings

    Returns:
        Convex parts as CCW index lists into ``points``, grouped by outer
        polygon in input order

    Raises:
        ValidationError: If any loop is malformed or loops are badly nested
        HoleBridgeError: If a hole cannot be connected to its boundary
        ConfigurationError: On invalid settings or OPT with holes
    """
    config = _resolve_config(config)
    algorithm = PartitionAlgorithm(algorithm)
    if algorithm is PartitionAlgorithm.OPT and len(holes) > 0:
        raise ConfigurationError("The optimal algorithm does not accept holes")

    coords = as_point_table(points)
    outer_loops = _validated_loops(coords, polys, config)
    hole_loops = _validated_loops(coords, holes, config, hole=True)

    assignment = assign_holes(coords, outer_loops, hole_loops)
    check_nesting(coords, outer_loops, hole_loops, assignment)

    merged = merge_holes(coords, outer_loops, hole_loops, config.eps, assignment)

    parts: Parts = []
    for loop in merged:
        parts.extend(_partition_loop(coords, loop, algorithm, config))

    logger.debug(
        "%s: %d polygon(s), %d hole(s) -> %d part(s)",
        algorithm.name, len(outer_loops), len(hole_loops), len(parts),
    )
    return parts


def apply(
    points,
    polys: Sequence[Sequence[int]],
    holes: Sequence[Sequence[int]] = (),
    config: Optional[PartitionConfig] = None,
) -> Result:
    """Partition polygons with holes into convex parts (Hertel-Mehlhorn).

    Args:
        points: Shared point table, any sequence of ``(x, y)`` pairs
        polys: Outer loops, CCW index lists into ``points``
        holes: Hole loops, CW index lists into ``points``
        config: Optional settings

    Returns:
        ``(ok, parts)``; each part is a CCW list of indices into ``points``

    Examples:
        >>> pts = [(0, 0), (4, 0), (4, 4), (0, 4), (1, 1), (1, 2), (2, 2), (2, 1)]
        >>> ok, parts = apply(pts, [[0, 1, 2, 3]], [[4, 5, 6, 7]])
        >>> ok
        True
    """
    config = _resolve_config(config)
    return _run(
        "apply",
        lambda: convex_partition(points, polys, holes, PartitionAlgorithm.HM, config),
        config,
    )


__all__ = [
    'apply_opt',
    'apply_hm',
    'apply',
    'convex_partition',
]
