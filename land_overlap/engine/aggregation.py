"""Area aggregator.

Turns feature collections into the scalar and tabular summaries the
charts consume: total area in km², a per-region count/area breakdown,
and row-oriented chart tables (``[[header, ...], [row, ...], ...]``).

Malformed geometry never raises here; it contributes zero area through
the geometry adapter.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from land_overlap.core.constants import (
    AREA_BY_TYPE_HEADER,
    INTERSECTION_LABEL,
    PARCELS_LABEL,
    REGION_CODE_KEYS,
    REGION_COUNT_HEADER,
    SQ_METRES_PER_SQ_KM,
    TERRITORIES_LABEL,
)
from land_overlap.engine.geometry import area_m2
from land_overlap.engine.region_filter import resolve_region_code
from land_overlap.models.feature import FeatureCollection
from land_overlap.models.summary import AreaSummary, RegionStats


def total_area_km2(collection: FeatureCollection | None) -> float:
    """Summed geodesic area of a collection in km².  ``None`` or empty gives 0.0."""
    if collection is None or collection.is_empty:
        return 0.0
    return area_m2(collection) / SQ_METRES_PER_SQ_KM


def breakdown_by_region(
    collection: FeatureCollection | None,
    region_codes: Iterable[str],
    *,
    keys: Iterable[str] = REGION_CODE_KEYS,
) -> dict[str, RegionStats]:
    """Count and sum the area of features per region code.

    Every code in ``region_codes`` appears in the result, in the given
    order, even when no feature matches (count 0, area 0.0), so chart
    axes stay stable across selections.  Features whose code is not
    enumerated are ignored.
    """
    counts: dict[str, int] = {code: 0 for code in region_codes}
    areas: dict[str, float] = {code: 0.0 for code in counts}

    if collection is not None:
        keys = tuple(keys)
        for feature in collection:
            code = resolve_region_code(feature, keys)
            if code not in counts:
                continue
            counts[code] += 1
            areas[code] += area_m2(feature) / SQ_METRES_PER_SQ_KM

    return {code: RegionStats(count=counts[code], area_km2=areas[code]) for code in counts}


def summarize(
    collection: FeatureCollection | None,
    region_codes: Iterable[str],
    *,
    keys: Iterable[str] = REGION_CODE_KEYS,
) -> AreaSummary:
    """Total area plus per-region breakdown of one collection."""
    return AreaSummary(
        total_km2=total_area_km2(collection),
        by_region=breakdown_by_region(collection, region_codes, keys=keys),
    )


# ---------------------------------------------------------------------------
# Chart tables
# ---------------------------------------------------------------------------


def region_count_table(breakdown: Mapping[str, RegionStats]) -> list[list[object]]:
    """Bar-chart rows: one ``[code, count]`` row per region after the header."""
    return [list(REGION_COUNT_HEADER)] + [
        [code, stats.count] for code, stats in breakdown.items()
    ]


def area_by_type_table(
    parcels_km2: float,
    territories_km2: float,
    intersection_km2: float,
) -> list[list[object]]:
    """Pie-chart rows comparing parcel, territory and intersection areas."""
    return [
        list(AREA_BY_TYPE_HEADER),
        [PARCELS_LABEL, parcels_km2],
        [TERRITORIES_LABEL, territories_km2],
        [INTERSECTION_LABEL, intersection_km2],
    ]
