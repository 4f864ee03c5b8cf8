"""Pydantic models for area summaries.

``RegionStats`` and ``AreaSummary`` are the tabular outputs of the area
aggregator.  All areas are square kilometres.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RegionStats(BaseModel):
    """Count and summed area of the features resolved to one region code.

    Attributes:
        count: Number of features whose region code matches.
        area_km2: Summed geodesic area of those features in km².
    """

    count: int = Field(default=0, ge=0)
    area_km2: float = Field(default=0.0, ge=0.0)


class AreaSummary(BaseModel):
    """Total area of a collection plus its per-region breakdown.

    Attributes:
        total_km2: Summed geodesic area of every feature in km².
        by_region: Breakdown keyed by region code, in enumeration order.
            Codes with no matching feature are present with zero values.
    """

    total_km2: float = Field(default=0.0, ge=0.0)
    by_region: dict[str, RegionStats] = Field(default_factory=dict)

    @property
    def total_count(self) -> int:
        """Number of features counted across all enumerated regions."""
        return sum(stats.count for stats in self.by_region.values())
