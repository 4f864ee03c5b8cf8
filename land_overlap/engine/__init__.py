"""Geometric intersection and area-aggregation engine.

- geometry: Shapely/pyproj adapter (area, intersect, bbox)
- region_filter: region-code resolution and filtering
- intersection: pairwise intersection of two collections
- aggregation: areas in km², per-region breakdowns, chart tables
"""

from land_overlap.engine.aggregation import (
    area_by_type_table,
    breakdown_by_region,
    region_count_table,
    summarize,
    total_area_km2,
)
from land_overlap.engine.geometry import area_m2, compute_bbox, intersect
from land_overlap.engine.intersection import intersect_all
from land_overlap.engine.region_filter import (
    NO_FILTER,
    RegionSelection,
    filter_by_region,
    resolve_region_code,
    toggle_region,
)

__all__ = [
    "NO_FILTER",
    "RegionSelection",
    "area_by_type_table",
    "area_m2",
    "breakdown_by_region",
    "compute_bbox",
    "filter_by_region",
    "intersect",
    "intersect_all",
    "region_count_table",
    "resolve_region_code",
    "summarize",
    "toggle_region",
    "total_area_km2",
]
