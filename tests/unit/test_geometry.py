"""Unit tests for the geometry primitives adapter.

Covers:
- Geodesic area of polygons, holes, multipolygons and collections
- Zero area (never an exception) for missing, empty and malformed geometry
- Pairwise intersection: overlap, containment, disjoint, touching, invalid
- Bounding boxes
"""

from __future__ import annotations

import pytest
from shapely.geometry import box, shape

from land_overlap.engine.geometry import (
    area_m2,
    compute_bbox,
    intersect,
    polygonal_parts,
    to_shape,
)
from land_overlap.models.feature import Feature, FeatureCollection
from tests.conftest import collection, square

# 1 degree x 1 degree at the equator on WGS 84 is roughly 12,309 km²
ONE_DEGREE_SQUARE_AT_EQUATOR_M2 = 12_309e6

BOWTIE = Feature(
    geometry={
        "type": "Polygon",
        "coordinates": [[[0, 0], [2, 2], [2, 0], [0, 2], [0, 0]]],
    }
)


# ===========================================================================
# Area
# ===========================================================================


class TestArea:
    """Geodesic area in square metres."""

    def test_one_degree_square_at_equator(self) -> None:
        assert area_m2(square(0, 0, 1, 1)) == pytest.approx(
            ONE_DEGREE_SQUARE_AT_EQUATOR_M2, rel=0.01
        )

    def test_winding_order_agnostic(self) -> None:
        ccw = square(0, 0, 1, 1)
        ring = ccw.geometry["coordinates"][0]  # type: ignore[index]
        cw = Feature(geometry={"type": "Polygon", "coordinates": [list(reversed(ring))]})
        assert area_m2(cw) == pytest.approx(area_m2(ccw))

    def test_area_shrinks_towards_the_poles(self) -> None:
        """Same degree extent covers less ground at higher latitude."""
        assert area_m2(square(0, 60, 1, 61)) < area_m2(square(0, 0, 1, 1))

    def test_hole_is_subtracted(self) -> None:
        outer = [[0, 0], [2, 0], [2, 2], [0, 2], [0, 0]]
        hole = [[0.5, 0.5], [1.5, 0.5], [1.5, 1.5], [0.5, 1.5], [0.5, 0.5]]
        with_hole = Feature(geometry={"type": "Polygon", "coordinates": [outer, hole]})
        expected = area_m2(square(0, 0, 2, 2)) - area_m2(square(0.5, 0.5, 1.5, 1.5))
        assert area_m2(with_hole) == pytest.approx(expected, rel=1e-6)

    def test_multipolygon_sums_parts(self) -> None:
        a = square(0, 0, 1, 1).geometry["coordinates"]  # type: ignore[index]
        b = square(3, 3, 4, 4).geometry["coordinates"]  # type: ignore[index]
        multi = Feature(geometry={"type": "MultiPolygon", "coordinates": [a, b]})
        expected = area_m2(square(0, 0, 1, 1)) + area_m2(square(3, 3, 4, 4))
        assert area_m2(multi) == pytest.approx(expected)

    def test_collection_sums_features(self) -> None:
        fc = collection(square(0, 0, 1, 1), square(3, 3, 4, 4))
        expected = area_m2(square(0, 0, 1, 1)) + area_m2(square(3, 3, 4, 4))
        assert area_m2(fc) == pytest.approx(expected)

    def test_empty_collection_is_zero(self) -> None:
        assert area_m2(FeatureCollection()) == 0.0

    def test_none_is_zero(self) -> None:
        assert area_m2(None) == 0.0


class TestAreaDegenerate:
    """Malformed geometry reports zero instead of raising."""

    @pytest.mark.parametrize(
        "geometry",
        [
            None,
            {"type": "Polygon", "coordinates": [[]]},
            {"type": "Polygon", "coordinates": []},
            {"type": "Polygon"},
            {"type": "Polygon", "coordinates": [[[0, 0], [1, 1]]]},
            {"type": "Polygon", "coordinates": [[["a", "b"], [1, 0], [1, 1], ["a", "b"]]]},
            {"type": "Bogus", "coordinates": [1, 2]},
            {"coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
            {"type": "Point", "coordinates": [0, 0]},
            {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
        ],
        ids=[
            "no-geometry",
            "empty-ring",
            "no-rings",
            "missing-coordinates",
            "two-point-ring",
            "non-numeric",
            "unknown-type",
            "missing-type",
            "point",
            "line",
        ],
    )
    def test_degenerate_area_is_zero(self, geometry: dict[str, object] | None) -> None:
        assert area_m2(Feature(geometry=geometry)) == 0.0

    def test_degenerate_feature_does_not_poison_collection(self) -> None:
        fc = collection(
            square(0, 0, 1, 1),
            Feature(geometry={"type": "Polygon", "coordinates": [[]]}),
        )
        assert area_m2(fc) == pytest.approx(area_m2(square(0, 0, 1, 1)))

    def test_collinear_ring_has_no_area(self) -> None:
        ring = [[0, 0], [1, 0], [2, 0], [0, 0]]
        flat = Feature(geometry={"type": "Polygon", "coordinates": [ring]})
        assert area_m2(flat) == pytest.approx(0.0, abs=1.0)

    def test_self_intersecting_polygon_does_not_raise(self) -> None:
        assert area_m2(BOWTIE) >= 0.0

    @pytest.mark.parametrize(
        "geometry",
        [
            {"type": "MultiPolygon", "coordinates": [[[]]]},
            {"type": "GeometryCollection", "geometries": []},
            {"type": "Point", "coordinates": [0, 0]},
        ],
        ids=["empty-multipolygon", "empty-collection", "point"],
    )
    def test_zero_area_is_float(self, geometry: dict[str, object]) -> None:
        result = area_m2(Feature(geometry=geometry))
        assert isinstance(result, float)
        assert result == 0.0

    def test_collection_of_non_polygons_is_float(self) -> None:
        fc = collection(Feature(geometry={"type": "Point", "coordinates": [0, 0]}))
        assert isinstance(area_m2(fc), float)


# ===========================================================================
# Conversion helpers
# ===========================================================================


class TestConversion:
    def test_to_shape_builds_polygon(self) -> None:
        geom = to_shape(square(0, 0, 1, 1))
        assert geom is not None
        assert geom.equals(box(0, 0, 1, 1))

    def test_to_shape_none_for_missing_geometry(self) -> None:
        assert to_shape(Feature()) is None

    def test_to_shape_none_for_malformed_geometry(self) -> None:
        assert to_shape(Feature(geometry={"type": "Polygon"})) is None

    def test_polygonal_parts_drops_lines(self) -> None:
        line_and_box = box(0, 0, 1, 1).union(box(5, 5, 6, 6)).boundary.union(box(2, 2, 3, 3))
        parts = polygonal_parts(line_and_box)
        assert len(parts) == 1
        assert parts[0].equals(box(2, 2, 3, 3))


# ===========================================================================
# Intersection
# ===========================================================================


class TestIntersect:
    """Pairwise intersection returns a Feature or None."""

    def test_overlapping_squares(self) -> None:
        result = intersect(square(0, 0, 2, 2), square(1, 1, 3, 3))
        assert result is not None
        assert result.geometry_type == "Polygon"
        assert shape(result.geometry).equals(box(1, 1, 2, 2))

    def test_contained_square(self) -> None:
        result = intersect(square(0, 0, 4, 4), square(1, 1, 2, 2))
        assert result is not None
        assert shape(result.geometry).equals(box(1, 1, 2, 2))

    def test_result_coordinates_are_lists(self) -> None:
        result = intersect(square(0, 0, 2, 2), square(1, 1, 3, 3))
        assert result is not None
        ring = result.geometry["coordinates"][0]  # type: ignore[index]
        assert isinstance(ring, list)
        assert all(isinstance(c, list) for c in ring)

    def test_properties_default_empty(self) -> None:
        result = intersect(square(0, 0, 2, 2, sigla_uf="X"), square(1, 1, 3, 3))
        assert result is not None
        assert result.properties == {}

    def test_properties_are_copied(self) -> None:
        props: dict[str, object] = {"sigla_uf": "AM"}
        result = intersect(square(0, 0, 2, 2), square(1, 1, 3, 3), properties=props)
        assert result is not None
        assert result.properties == {"sigla_uf": "AM"}
        assert result.properties is not props

    def test_disjoint_is_none(self) -> None:
        assert intersect(square(0, 0, 1, 1), square(5, 5, 6, 6)) is None

    def test_shared_edge_is_none(self) -> None:
        """Touching polygons overlap only in a line: no areal intersection."""
        assert intersect(square(0, 0, 1, 1), square(1, 0, 2, 1)) is None

    def test_shared_corner_is_none(self) -> None:
        assert intersect(square(0, 0, 1, 1), square(1, 1, 2, 2)) is None

    def test_multipolygon_result(self) -> None:
        a = square(0, 0, 1, 1).geometry["coordinates"]  # type: ignore[index]
        b = square(2, 0, 3, 1).geometry["coordinates"]  # type: ignore[index]
        two_blocks = Feature(geometry={"type": "MultiPolygon", "coordinates": [a, b]})
        result = intersect(two_blocks, square(0.5, 0, 2.5, 1))
        assert result is not None
        assert result.geometry_type == "MultiPolygon"
        assert shape(result.geometry).equals(box(0.5, 0, 1, 1).union(box(2, 0, 2.5, 1)))

    def test_missing_geometry_is_none(self) -> None:
        assert intersect(Feature(), square(0, 0, 1, 1)) is None

    def test_empty_ring_is_none(self) -> None:
        empty = Feature(geometry={"type": "Polygon", "coordinates": [[]]})
        assert intersect(empty, square(0, 0, 1, 1)) is None

    def test_invalid_geometry_never_raises(self) -> None:
        result = intersect(BOWTIE, square(0, 0, 2, 2))
        assert result is None or isinstance(result, Feature)


# ===========================================================================
# Bounding box
# ===========================================================================


class TestComputeBbox:
    def test_square_bbox(self) -> None:
        assert compute_bbox(square(-60, -4, -59, -3)) == pytest.approx((-60, -4, -59, -3))

    def test_missing_geometry(self) -> None:
        assert compute_bbox(Feature()) is None

    def test_empty_ring(self) -> None:
        assert compute_bbox(Feature(geometry={"type": "Polygon", "coordinates": [[]]})) is None
