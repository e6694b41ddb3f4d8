"""Tests for the metrics module."""

import pytest
from shapely.geometry import Polygon

from polypartition.core.geometry_utils import as_point_table, region_to_polygon
from polypartition.metrics import (
    measure_partition,
    min_parts_bound,
    notch_count,
    parts_to_polygons,
    total_overlap_area,
)


SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
L_SHAPE = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
U_SHAPE = [(0, 0), (3, 0), (3, 2), (2, 2), (2, 1), (1, 1), (1, 2), (0, 2)]


class TestPartsToPolygons:
    """Tests for parts_to_polygons()."""

    def test_l_shape_parts(self):
        polygons = parts_to_polygons(L_SHAPE, [[0, 1, 2, 3], [0, 3, 4, 5]])
        assert len(polygons) == 2
        assert all(isinstance(p, Polygon) for p in polygons)
        assert [p.area for p in polygons] == [pytest.approx(1.5), pytest.approx(1.5)]


class TestTotalOverlapArea:
    """Tests for total_overlap_area()."""

    def test_no_overlap(self):
        a = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        b = Polygon([(1, 0), (2, 0), (2, 1), (1, 1)])
        assert total_overlap_area([a, b]) == pytest.approx(0.0)

    def test_overlap(self):
        a = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
        b = Polygon([(1, 1), (3, 1), (3, 3), (1, 3)])
        assert total_overlap_area([a, b]) == pytest.approx(1.0)

    def test_single_geometry(self):
        assert total_overlap_area([Polygon(SQUARE)]) == 0.0

    def test_empty_geometries_ignored(self):
        assert total_overlap_area([Polygon(), Polygon(SQUARE)]) == 0.0


class TestMeasurePartition:
    """Tests for measure_partition()."""

    def test_l_shape(self):
        parts = [[0, 1, 2, 3], [0, 3, 4, 5]]
        region = region_to_polygon(as_point_table(L_SHAPE), range(6))
        stats = measure_partition(L_SHAPE, parts, region=region)

        assert stats["part_count"] == 2
        assert stats["area"] == pytest.approx(3.0)
        assert stats["region_area"] == pytest.approx(3.0)
        assert stats["area_ratio"] == pytest.approx(1.0)
        assert stats["overlap_area"] == pytest.approx(0.0, abs=1e-9)
        assert stats["all_convex"] is True

    def test_without_region(self):
        stats = measure_partition(SQUARE, [[0, 1, 2, 3]])
        assert stats["region_area"] is None
        assert stats["area_ratio"] is None

    def test_non_convex_part(self):
        stats = measure_partition(L_SHAPE, [list(range(6))])
        assert stats["all_convex"] is False


class TestNotches:
    """Tests for notch_count() and min_parts_bound()."""

    @pytest.mark.parametrize("points, notches, bound", [
        (SQUARE, 0, 1),
        (L_SHAPE, 1, 2),
        (U_SHAPE, 2, 2),
    ])
    def test_counts(self, points, notches, bound):
        assert notch_count(points) == notches
        assert min_parts_bound(points) == bound

    def test_sub_loop(self):
        points = [(9, 9)] + L_SHAPE
        assert notch_count(points, [1, 2, 3, 4, 5, 6]) == 1
