"""Canonical payload contracts for the engine's data boundaries.

Every GeoJSON-shaped input and every dashboard output is defined here as
a ``TypedDict``.  This module is the single source of truth for field
names.  Renames are caught by pyright, and the model tests check that
``to_dict()`` output complies at runtime.

Design notes:
- ``TypedDict`` was chosen because sources arrive as decoded JSON and
  the front end consumes JSON.  TypedDicts need no conversion.
- Geometry coordinates stay loosely typed: Polygon and MultiPolygon nest
  to different depths.
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# GeoJSON inputs / map outputs
# ---------------------------------------------------------------------------


class GeometryPayload(TypedDict):
    """GeoJSON geometry object (``[lon, lat]`` coordinate order)."""

    type: str
    coordinates: list[object]


class FeaturePayload(TypedDict):
    """GeoJSON Feature as loaded from a source file or drawn on the map."""

    type: str
    geometry: GeometryPayload | None
    properties: dict[str, object]


class FeatureCollectionPayload(TypedDict):
    """GeoJSON FeatureCollection."""

    type: str
    features: list[FeaturePayload]


# ---------------------------------------------------------------------------
# Dashboard outputs
# ---------------------------------------------------------------------------


class MapLayerPayload(TypedDict):
    """One map layer: its data plus caller-assigned stroke/fill styling."""

    name: str
    data: FeatureCollectionPayload
    style: dict[str, object]


class FitBoundsPayload(TypedDict):
    """Map extent as ``[[south, west], [north, east]]`` in ``[lat, lon]`` order."""

    bounds: list[list[float]]
    padding: list[int]


class RegionStatsPayload(TypedDict):
    """Per-region count and summed area."""

    count: int
    area_km2: float


class DashboardPayload(TypedDict):
    """Serialised ``DashboardState`` handed to the front end."""

    selection: list[str]
    parcels: FeatureCollectionPayload | None
    territories: FeatureCollectionPayload | None
    intersection: FeatureCollectionPayload
    parcels_area_km2: float
    territories_area_km2: float
    intersection_area_km2: float
    parcels_by_region: dict[str, RegionStatsPayload]
    region_count_table: list[list[object]]
    area_by_type_table: list[list[object]]
    fit_bounds: FitBoundsPayload | None
    layers: list[MapLayerPayload]
