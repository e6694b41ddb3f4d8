"""Tests for the high-level partition operations."""

import logging
import math

import numpy as np
import pytest
from shapely.geometry import Polygon

from polypartition import (
    apply,
    apply_hm,
    apply_opt,
    convex_partition,
    PartitionAlgorithm,
    PartitionConfig,
)
from polypartition.core.errors import (
    ConfigurationError,
    NestingError,
    NonSimpleError,
    OrientationError,
    PartitionWarning,
    ValidationError,
)
from polypartition.holes import assign_holes
from polypartition.metrics import parts_to_polygons, total_overlap_area
from polypartition.predicates import is_convex_polygon, signed_area


SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
L_SHAPE = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
U_SHAPE = [(0, 0), (3, 0), (3, 2), (2, 2), (2, 1), (1, 1), (1, 2), (0, 2)]
BOWTIE = [(0, 0), (2, 2), (2, 0), (0, 2)]
RAISE = PartitionConfig(raise_on_failure=True)


def _square_with_hole():
    points = [(0, 0), (4, 0), (4, 4), (0, 4), (1, 1), (1, 2), (2, 2), (2, 1)]
    return points, [[0, 1, 2, 3]], [[4, 5, 6, 7]]


def _random_region(seed, n=10):
    """Random star-shaped outer loop with up to three small star holes."""
    rng = np.random.default_rng(seed)
    points = []
    for k in range(n):
        angle = 2 * math.pi * (k + rng.uniform(0.0, 0.8)) / n
        radius = rng.uniform(6.0, 10.0)
        points.append((radius * math.cos(angle), radius * math.sin(angle)))

    holes = []
    for h in range(int(rng.integers(1, 4))):
        center = 2 * math.pi * h / 3 + rng.uniform(0.0, 0.5)
        cx, cy = 2.5 * math.cos(center), 2.5 * math.sin(center)
        m = int(rng.integers(4, 7))
        start = len(points)
        for k in range(m):
            angle = 2 * math.pi * (k + rng.uniform(0.0, 0.8)) / m
            radius = rng.uniform(0.3, 0.8)
            points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
        holes.append(list(range(start + m - 1, start - 1, -1)))
    return points, [list(range(n))], holes


def _assert_valid_partition(points, parts, expected_area):
    for part in parts:
        assert is_convex_polygon(points, part)
    polygons = parts_to_polygons(points, parts)
    assert sum(p.area for p in polygons) == pytest.approx(expected_area)
    assert total_overlap_area(polygons) == pytest.approx(0.0, abs=1e-9)


class TestApplySimple:
    """Tests for apply_opt() and apply_hm() on valid input."""

    @pytest.mark.parametrize("func", [apply_opt, apply_hm])
    def test_square_is_one_part(self, func):
        ok, parts = func(SQUARE)
        assert ok
        assert parts == [[0, 1, 2, 3]]

    @pytest.mark.parametrize("func", [apply_opt, apply_hm])
    def test_l_shape_two_parts(self, func):
        ok, parts = func(L_SHAPE)
        assert ok
        assert len(parts) == 2
        _assert_valid_partition(L_SHAPE, parts, 3.0)

    @pytest.mark.parametrize("func", [apply_opt, apply_hm])
    def test_numpy_input(self, func):
        ok, parts = func(np.array(U_SHAPE, dtype=float))
        assert ok
        _assert_valid_partition(U_SHAPE, parts, 5.0)

    def test_convex_input_unchanged(self):
        pts = [(math.cos(2 * math.pi * k / 8), math.sin(2 * math.pi * k / 8)) for k in range(8)]
        for func in (apply_opt, apply_hm):
            ok, parts = func(pts)
            assert ok
            assert parts == [list(range(8))]

    def test_opt_never_worse_than_hm(self):
        _, opt = apply_opt(U_SHAPE)
        _, hm = apply_hm(U_SHAPE)
        assert len(opt) <= len(hm) <= 4 * len(opt)


class TestApplySimpleFailures:
    """Tests for the failure contract of apply_opt() and apply_hm()."""

    @pytest.mark.parametrize("func", [apply_opt, apply_hm])
    def test_two_vertices(self, func):
        with pytest.warns(PartitionWarning):
            ok, parts = func([(0, 0), (1, 0)])
        assert not ok
        assert parts == []

    @pytest.mark.parametrize("func", [apply_opt, apply_hm])
    def test_self_intersecting(self, func):
        with pytest.warns(PartitionWarning):
            ok, parts = func(BOWTIE)
        assert (ok, parts) == (False, [])

    @pytest.mark.parametrize("func", [apply_opt, apply_hm])
    def test_clockwise(self, func):
        with pytest.warns(PartitionWarning, match="counter-clockwise"):
            ok, parts = func(SQUARE[::-1])
        assert (ok, parts) == (False, [])

    def test_non_finite(self):
        with pytest.warns(PartitionWarning):
            ok, _ = apply_hm([(0, 0), (1, 0), (float("nan"), 1)])
        assert not ok

    def test_warning_carries_cause(self):
        with pytest.warns(PartitionWarning) as record:
            apply_opt(BOWTIE)
        warning = record[0].message
        assert warning.operation == "apply_opt"
        assert isinstance(warning.cause, NonSimpleError)

    def test_raise_on_failure(self):
        with pytest.raises(NonSimpleError):
            apply_opt(BOWTIE, config=RAISE)
        with pytest.raises(ValidationError):
            apply_hm([(0, 0), (1, 0)], config=RAISE)

    def test_invalid_config(self):
        with pytest.raises(ConfigurationError):
            apply_opt(SQUARE, config=PartitionConfig(eps=-1.0))


class TestOptFallback:
    """Tests for the vertex ceiling on the optimal algorithm."""

    def test_large_polygon_uses_hertel_mehlhorn(self, caplog):
        config = PartitionConfig(max_opt_vertices=6)
        with caplog.at_level(logging.INFO, logger="polypartition.partition"):
            ok, parts = apply_opt(U_SHAPE, config=config)
        assert ok
        assert parts == apply_hm(U_SHAPE)[1]
        assert "Hertel-Mehlhorn" in caplog.text

    def test_small_polygon_stays_optimal(self):
        config = PartitionConfig(max_opt_vertices=6)
        assert apply_opt(L_SHAPE, config=config) == apply_opt(L_SHAPE)


class TestApplyWithHoles:
    """Tests for apply() on polygons with holes."""

    def test_square_with_hole(self):
        points, polys, holes = _square_with_hole()
        ok, parts = apply(points, polys, holes)

        assert ok
        _assert_valid_partition(points, parts, 15.0)
        hole = Polygon([points[i] for i in holes[0]])
        for part in parts_to_polygons(points, parts):
            assert part.intersection(hole).area == pytest.approx(0.0, abs=1e-9)

    def test_without_holes(self):
        ok, parts = apply(L_SHAPE, [list(range(6))])
        assert ok
        _assert_valid_partition(L_SHAPE, parts, 3.0)

    def test_two_holes(self):
        points = [
            (0, 0), (6, 0), (6, 3), (0, 3),
            (1, 1), (1, 2), (2, 2), (2, 1),
            (4, 1), (4, 2), (5, 2), (5, 1),
        ]
        ok, parts = apply(points, [[0, 1, 2, 3]], [[4, 5, 6, 7], [8, 9, 10, 11]])
        assert ok
        _assert_valid_partition(points, parts, 16.0)

    def test_two_outer_polygons(self):
        points = SQUARE + [(3, 0), (5, 0), (5, 1), (4, 1), (4, 2), (3, 2)]
        ok, parts = apply(points, [[0, 1, 2, 3], [4, 5, 6, 7, 8, 9]])
        assert ok
        assert parts[0] == [0, 1, 2, 3]
        _assert_valid_partition(points, parts, 4.0)

    def test_rejects_counter_clockwise_hole(self):
        points, polys, _ = _square_with_hole()
        with pytest.warns(PartitionWarning):
            ok, parts = apply(points, polys, [[4, 7, 6, 5]])
        assert (ok, parts) == (False, [])
        with pytest.raises(OrientationError):
            apply(points, polys, [[4, 7, 6, 5]], config=RAISE)

    def test_rejects_hole_outside(self):
        points = SQUARE + [(5, 5), (5, 6), (6, 6), (6, 5)]
        with pytest.raises(NestingError):
            apply(points, [[0, 1, 2, 3]], [[4, 5, 6, 7]], config=RAISE)

    def test_rejects_crossing_polygons(self):
        points = [(0, 0), (2, 0), (2, 2), (0, 2), (1, 1), (3, 1), (3, 3), (1, 3)]
        with pytest.warns(PartitionWarning):
            ok, _ = apply(points, [[0, 1, 2, 3], [4, 5, 6, 7]])
        assert not ok

    def test_rejects_out_of_range_index(self):
        with pytest.raises(ValidationError):
            apply(SQUARE, [[0, 1, 2, 7]], config=RAISE)


class TestConvexPartition:
    """Tests for the raising convex_partition()."""

    def test_hertel_mehlhorn_default(self):
        points, polys, holes = _square_with_hole()
        parts = convex_partition(points, polys, holes)
        _assert_valid_partition(points, parts, 15.0)

    def test_optimal_by_name(self):
        parts = convex_partition(L_SHAPE, [list(range(6))], algorithm="opt")
        assert len(parts) == 2

    def test_optimal_rejects_holes(self):
        points, polys, holes = _square_with_hole()
        with pytest.raises(ConfigurationError):
            convex_partition(points, polys, holes, algorithm=PartitionAlgorithm.OPT)

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            convex_partition(L_SHAPE, [list(range(6))], algorithm="fastest")

    def test_holes_assigned_once(self, monkeypatch):
        calls = []

        def counting(*args):
            calls.append(args)
            return assign_holes(*args)

        monkeypatch.setattr("polypartition.partition.assign_holes", counting)
        monkeypatch.setattr("polypartition.holes.assign_holes", counting)
        points, polys, holes = _square_with_hole()
        convex_partition(points, polys, holes)
        assert len(calls) == 1


class TestRandomRegions:
    """apply() on seeded random polygons with holes."""

    @pytest.mark.parametrize("seed", range(30))
    def test_random_holes(self, seed):
        points, polys, holes = _random_region(seed)
        ok, parts = apply(points, polys, holes)
        assert ok

        area = signed_area(points, polys[0]) + sum(signed_area(points, h) for h in holes)
        _assert_valid_partition(points, parts, area)
        hole_shapes = [Polygon([points[i] for i in hole]) for hole in holes]
        for part in parts_to_polygons(points, parts):
            for hole in hole_shapes:
                assert part.intersection(hole).area == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("seed", range(10))
    def test_apply_opt_matches_bound(self, seed):
        points, polys, _ = _random_region(seed)
        outer = [points[i] for i in polys[0]]
        ok_opt, opt = apply_opt(outer)
        ok_hm, hm = apply_hm(outer)
        assert ok_opt and ok_hm
        _assert_valid_partition(outer, opt, signed_area(outer, range(len(outer))))
        assert len(opt) <= len(hm) <= 4 * len(opt)
