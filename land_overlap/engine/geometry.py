"""Geometry primitives adapter.

Wraps the two operations the dashboard needs from a computational
geometry stack, ``area`` and ``intersect``, behind a stable interface:

- Shapely builds and intersects geometries.
- ``pyproj.Geod`` measures geodesic area on the WGS 84 ellipsoid, so
  areas are correct in square metres regardless of latitude.

Nothing here raises for bad geometry.  Upstream data quality is
expected to be imperfect: a geometry that cannot be built or measured
contributes zero area, and a pair that cannot be intersected reports
"no intersection" (``None``), exactly like a pair that does not overlap.
Skips are logged at DEBUG only.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING

from land_overlap.models.feature import Feature, FeatureCollection

if TYPE_CHECKING:
    from pyproj import Geod
    from shapely.geometry import Polygon
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("land_overlap.engine.geometry")

# A closed ring needs 3 distinct vertices plus the closing vertex
MIN_RING_COORDS = 4

ELLIPSOID = "WGS84"

# Exceptions the shapely/pyproj calls raise for malformed input.  They are
# absorbed here so callers only ever see "zero" or "None".
_GEOMETRY_ERRORS: tuple[type[Exception], ...] = (
    AttributeError,
    IndexError,
    KeyError,
    TypeError,
    ValueError,
)


def _geometry_errors() -> tuple[type[Exception], ...]:
    from pyproj.exceptions import GeodError
    from shapely.errors import ShapelyError

    return (*_GEOMETRY_ERRORS, ShapelyError, GeodError)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def to_shape(feature: Feature) -> BaseGeometry | None:
    """Build a Shapely geometry from a feature's GeoJSON geometry.

    Returns:
        The geometry, or ``None`` if the feature has no geometry or it
        cannot be built (missing ``coordinates``, unknown type, rings
        with too few points, non-numeric coordinates).
    """
    if feature.geometry is None:
        return None

    from shapely.geometry import shape

    try:
        return shape(feature.geometry)
    except _geometry_errors() as exc:
        logger.debug("Skipping unbuildable %s geometry: %s", feature.geometry_type or "?", exc)
        return None


def to_geojson(geom: BaseGeometry) -> dict[str, object]:
    """Serialise a Shapely geometry to a GeoJSON geometry dict with list coordinates."""
    import shapely

    return json.loads(shapely.to_geojson(geom))


def polygonal_parts(geom: BaseGeometry) -> list[Polygon]:
    """Return the non-empty polygons contained in ``geom``.

    Polygons yield themselves, MultiPolygons and GeometryCollections
    yield their polygonal members recursively, and any other geometry
    type (points, lines) yields nothing.
    """
    if geom.is_empty:
        return []
    if geom.geom_type == "Polygon":
        return [geom]  # type: ignore[list-item]
    if geom.geom_type in ("MultiPolygon", "GeometryCollection"):
        parts: list[Polygon] = []
        for member in geom.geoms:  # type: ignore[attr-defined]
            parts.extend(polygonal_parts(member))
        return parts
    return []


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------


def area_m2(target: Feature | FeatureCollection | None) -> float:
    """Geodesic area in square metres of a feature or a whole collection.

    A collection's area is the sum of its features' areas.  Only
    polygonal geometry contributes.  Missing, empty or unmeasurable
    geometry contributes ``0.0``; this function never raises for bad
    geometry.

    Args:
        target: A ``Feature``, a ``FeatureCollection``, or ``None``.

    Returns:
        Non-negative area in square metres.
    """
    if target is None:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps=ELLIPSOID)

    if isinstance(target, FeatureCollection):
        return sum((_feature_area_m2(geod, feature) for feature in target), 0.0)
    return _feature_area_m2(geod, target)


def _feature_area_m2(geod: Geod, feature: Feature) -> float:
    geom = to_shape(feature)
    if geom is None:
        return 0.0
    try:
        area = sum((_polygon_area_m2(geod, poly) for poly in polygonal_parts(geom)), 0.0)
    except _geometry_errors() as exc:
        logger.debug("Area of %s geometry could not be measured: %s", geom.geom_type, exc)
        return 0.0
    if not math.isfinite(area):
        return 0.0
    return area


def _polygon_area_m2(geod: Geod, poly: Polygon) -> float:
    """Exterior area minus hole areas, winding-order agnostic."""
    total = _ring_area_m2(geod, list(poly.exterior.coords))
    for ring in poly.interiors:
        total -= _ring_area_m2(geod, list(ring.coords))
    return max(total, 0.0)


def _ring_area_m2(geod: Geod, coords: list[tuple[float, ...]]) -> float:
    if len(coords) < MIN_RING_COORDS:
        return 0.0
    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    # Geod.polygon_area_perimeter returns (signed_area_m2, perimeter_m)
    ring_area, _perimeter = geod.polygon_area_perimeter(lons, lats)
    return abs(ring_area)


# ---------------------------------------------------------------------------
# Intersection
# ---------------------------------------------------------------------------


def intersect(
    a: Feature,
    b: Feature,
    *,
    properties: dict[str, object] | None = None,
) -> Feature | None:
    """Geometric intersection of two polygonal features.

    Args:
        a: First feature.
        b: Second feature.
        properties: Properties for the resulting feature (default ``{}``).

    Returns:
        A new ``Feature`` whose geometry is the polygonal part of the
        overlap (Polygon or MultiPolygon), or ``None`` when the features
        do not overlap, only touch along an edge or at a point, or
        either geometry cannot be built or intersected.
    """
    shape_a = to_shape(a)
    shape_b = to_shape(b)
    if shape_a is None or shape_b is None or shape_a.is_empty or shape_b.is_empty:
        return None

    try:
        if not shape_a.intersects(shape_b):
            return None
        overlap = shape_a.intersection(shape_b)
        parts = polygonal_parts(overlap)
    except _geometry_errors() as exc:
        logger.debug(
            "Intersection of %s and %s failed: %s",
            shape_a.geom_type,
            shape_b.geom_type,
            exc,
        )
        return None

    if not parts:
        return None

    from shapely.geometry import MultiPolygon

    result = parts[0] if len(parts) == 1 else MultiPolygon(parts)
    if result.area == 0:
        return None

    return Feature(geometry=to_geojson(result), properties=dict(properties or {}))


# ---------------------------------------------------------------------------
# Bounding box
# ---------------------------------------------------------------------------


def compute_bbox(feature: Feature) -> tuple[float, float, float, float] | None:
    """Tight bounding box of a feature's geometry.

    Returns:
        ``(min_lon, min_lat, max_lon, max_lat)``, or ``None`` if the
        geometry is missing, empty or cannot be built.
    """
    geom = to_shape(feature)
    if geom is None or geom.is_empty:
        return None
    min_lon, min_lat, max_lon, max_lat = geom.bounds
    if not all(math.isfinite(v) for v in (min_lon, min_lat, max_lon, max_lat)):
        return None
    return (min_lon, min_lat, max_lon, max_lat)
