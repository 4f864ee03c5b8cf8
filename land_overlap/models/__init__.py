"""Data models and schemas.

Defines the data structures used throughout the engine:
- Feature / FeatureCollection: GeoJSON records, validated at the boundary
- RegionStats / AreaSummary: area aggregation outputs
- DashboardState: one full recomputation pass
"""

from land_overlap.models.feature import Feature, FeatureCollection
from land_overlap.models.state import DashboardState
from land_overlap.models.summary import AreaSummary, RegionStats

__all__ = [
    "AreaSummary",
    "DashboardState",
    "Feature",
    "FeatureCollection",
    "RegionStats",
]
