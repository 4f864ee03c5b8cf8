"""Data model for one recomputation pass of the dashboard.

A ``DashboardState`` is a pure derivation of (parcels, territories,
selection).  It holds no identity of its own and is rebuilt from scratch
on every change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from land_overlap.models.contracts import (
        DashboardPayload,
        FitBoundsPayload,
        MapLayerPayload,
    )
    from land_overlap.models.feature import FeatureCollection
    from land_overlap.models.summary import RegionStats


@dataclass(frozen=True, slots=True)
class DashboardState:
    """Everything the map and chart renderers need for one selection.

    Attributes:
        selection: Region codes active for this pass (empty = no filter).
        parcels: Filtered land parcels, or ``None`` while not loaded.
        territories: Filtered indigenous territories, or ``None``.
        intersection: Pairwise intersections; always present.
        parcels_area_km2: Total parcel area in km².
        territories_area_km2: Total territory area in km².
        intersection_area_km2: Total intersection area in km².
        parcels_by_region: Parcel count and area per known region code.
        region_count_table: Bar-chart rows ``[[header...], [code, count], ...]``.
        area_by_type_table: Pie-chart rows ``[[header...], [label, km2], ...]``.
        fit_bounds: Map extent of the filtered parcels, or ``None``.
        layers: Map layer descriptors in draw order.
    """

    selection: frozenset[str]
    parcels: FeatureCollection | None
    territories: FeatureCollection | None
    intersection: FeatureCollection
    parcels_area_km2: float = 0.0
    territories_area_km2: float = 0.0
    intersection_area_km2: float = 0.0
    parcels_by_region: dict[str, RegionStats] = field(default_factory=dict)
    region_count_table: list[list[object]] = field(default_factory=list)
    area_by_type_table: list[list[object]] = field(default_factory=list)
    fit_bounds: FitBoundsPayload | None = None
    layers: list[MapLayerPayload] = field(default_factory=list)

    def to_dict(self) -> DashboardPayload:
        """Serialise to a JSON-ready dict for the front end."""
        return {
            "selection": sorted(self.selection),
            "parcels": self.parcels.to_dict() if self.parcels is not None else None,  # type: ignore[typeddict-item]
            "territories": (
                self.territories.to_dict() if self.territories is not None else None  # type: ignore[typeddict-item]
            ),
            "intersection": self.intersection.to_dict(),  # type: ignore[typeddict-item]
            "parcels_area_km2": self.parcels_area_km2,
            "territories_area_km2": self.territories_area_km2,
            "intersection_area_km2": self.intersection_area_km2,
            "parcels_by_region": {
                code: stats.model_dump() for code, stats in self.parcels_by_region.items()  # type: ignore[misc]
            },
            "region_count_table": [list(row) for row in self.region_count_table],
            "area_by_type_table": [list(row) for row in self.area_by_type_table],
            "fit_bounds": self.fit_bounds,
            "layers": list(self.layers),
        }
