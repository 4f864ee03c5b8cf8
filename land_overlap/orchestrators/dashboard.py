"""Reactive recomputation layer for the dashboard.

``recompute`` is the single entry point: given one snapshot of
(parcels, territories, selection) it runs the whole pipeline

1. Region filter: both sides, same selection
2. Intersection: full cross product of the filtered sides
3. Aggregation: areas, per-region breakdown, chart tables
4. Map extent and layer descriptors

and returns a fresh ``DashboardState``.  It holds no state between runs.

``DashboardSession`` is the thin hosting shell around it.  Every watched
change (parcels loaded, territories loaded, selection edited) replaces
the snapshot value and triggers a full recompute; subscribers receive
the new state.  There is no incremental patching, so the last trigger's
inputs always win.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from land_overlap.core.config import DashboardConfig
from land_overlap.core.constants import (
    DEFAULT_FIT_BOUNDS_PADDING_PX,
    INTERSECTION_LAYER,
    LAYER_STYLES,
    PARCELS_LAYER,
    TERRITORIES_LAYER,
)
from land_overlap.core.exceptions import RegionSelectionError
from land_overlap.engine.aggregation import (
    area_by_type_table,
    breakdown_by_region,
    region_count_table,
    total_area_km2,
)
from land_overlap.engine.geometry import compute_bbox
from land_overlap.engine.intersection import intersect_all
from land_overlap.engine.region_filter import (
    NO_FILTER,
    RegionSelection,
    filter_by_region,
    toggle_region,
)
from land_overlap.loaders.geojson import load_feature_collection
from land_overlap.models.state import DashboardState

if TYPE_CHECKING:
    from land_overlap.models.contracts import FitBoundsPayload, MapLayerPayload
    from land_overlap.models.feature import FeatureCollection

logger = logging.getLogger("land_overlap.orchestrators.dashboard")

StateListener = Callable[[DashboardState], None]


# ---------------------------------------------------------------------------
# Pure recompute pass
# ---------------------------------------------------------------------------


def recompute(
    parcels: FeatureCollection | None,
    territories: FeatureCollection | None,
    selection: RegionSelection = NO_FILTER,
    *,
    config: DashboardConfig | None = None,
) -> DashboardState:
    """Run filter → intersect → aggregate over one snapshot of inputs.

    Args:
        parcels: Land parcels (left side), or ``None`` while not loaded.
        territories: Indigenous territories (right side), or ``None``.
        selection: Active region codes; empty means no filter.
        config: Region keys, known codes and map padding (defaults used
            when omitted).

    Returns:
        A new ``DashboardState``.  Never raises for bad geometry.
    """
    config = config or DashboardConfig()
    keys = config.region_code_keys

    filtered_parcels = filter_by_region(parcels, selection, keys=keys)
    filtered_territories = filter_by_region(territories, selection, keys=keys)
    intersection = intersect_all(filtered_parcels, filtered_territories)

    parcels_km2 = total_area_km2(filtered_parcels)
    territories_km2 = total_area_km2(filtered_territories)
    intersection_km2 = total_area_km2(intersection)

    by_region = breakdown_by_region(filtered_parcels, config.known_region_codes, keys=keys)

    logger.info(
        "Dashboard recomputed | selection=%s | parcels=%s | territories=%s | "
        "intersections=%d | parcels_area=%.2f km2 | territories_area=%.2f km2 | "
        "intersection_area=%.2f km2",
        ",".join(sorted(selection)) or "<all>",
        len(filtered_parcels) if filtered_parcels is not None else "absent",
        len(filtered_territories) if filtered_territories is not None else "absent",
        len(intersection),
        parcels_km2,
        territories_km2,
        intersection_km2,
    )

    return DashboardState(
        selection=frozenset(selection),
        parcels=filtered_parcels,
        territories=filtered_territories,
        intersection=intersection,
        parcels_area_km2=parcels_km2,
        territories_area_km2=territories_km2,
        intersection_area_km2=intersection_km2,
        parcels_by_region=by_region,
        region_count_table=region_count_table(by_region),
        area_by_type_table=area_by_type_table(parcels_km2, territories_km2, intersection_km2),
        fit_bounds=compute_fit_bounds(filtered_parcels, padding_px=config.fit_bounds_padding_px),
        layers=build_map_layers(filtered_parcels, filtered_territories, intersection),
    )


# ---------------------------------------------------------------------------
# Map helpers
# ---------------------------------------------------------------------------


def compute_fit_bounds(
    collection: FeatureCollection | None,
    *,
    padding_px: int = DEFAULT_FIT_BOUNDS_PADDING_PX,
) -> FitBoundsPayload | None:
    """Map extent covering every feature that has a measurable bbox.

    Features whose bounding box cannot be computed are skipped.

    Returns:
        ``{"bounds": [[min_lat, min_lon], [max_lat, max_lon]], "padding": [p, p]}``
        or ``None`` if the collection is absent, empty, or nothing in it
        is bounded.
    """
    if collection is None:
        return None

    bboxes = [bbox for bbox in (compute_bbox(f) for f in collection) if bbox is not None]
    if not bboxes:
        return None

    min_lon = min(b[0] for b in bboxes)
    min_lat = min(b[1] for b in bboxes)
    max_lon = max(b[2] for b in bboxes)
    max_lat = max(b[3] for b in bboxes)
    return {
        "bounds": [[min_lat, min_lon], [max_lat, max_lon]],
        "padding": [padding_px, padding_px],
    }


def build_map_layers(
    parcels: FeatureCollection | None,
    territories: FeatureCollection | None,
    intersection: FeatureCollection,
) -> list[MapLayerPayload]:
    """Layer descriptors in draw order: parcels, territories, intersection.

    Absent collections produce no layer; the intersection layer is only
    drawn when it has at least one feature.
    """
    layers: list[MapLayerPayload] = []
    for name, collection in (
        (PARCELS_LAYER, parcels),
        (TERRITORIES_LAYER, territories),
    ):
        if collection is not None:
            layers.append(_layer(name, collection))
    if not intersection.is_empty:
        layers.append(_layer(INTERSECTION_LAYER, intersection))
    return layers


def _layer(name: str, collection: FeatureCollection) -> MapLayerPayload:
    return {
        "name": name,
        "data": collection.to_dict(),  # type: ignore[typeddict-item]
        "style": dict(LAYER_STYLES[name]),
    }


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------


def parse_selection(raw: str | None) -> RegionSelection:
    """Parse a comma-separated list of region codes (``"AM,PA"``).

    Blank or missing input gives the empty (no filter) selection.
    """
    if not raw:
        return NO_FILTER
    return frozenset(code.strip() for code in raw.split(",") if code.strip())


def validate_selection(selection: Iterable[str], known_codes: Iterable[str]) -> RegionSelection:
    """Return ``selection`` as a frozenset after checking every code is known.

    Raises:
        RegionSelectionError: If any code is not in ``known_codes``.
    """
    selection = frozenset(selection)
    unknown = selection - frozenset(known_codes)
    if unknown:
        msg = f"Unknown region code(s): {', '.join(sorted(unknown))}"
        raise RegionSelectionError(msg)
    return selection


# ---------------------------------------------------------------------------
# Hosting session
# ---------------------------------------------------------------------------


class DashboardSession:
    """Holds the current input snapshot and recomputes on every change.

    Inputs are replaced, never mutated in place; each setter triggers a
    full ``recompute`` and notifies subscribers with the new state.
    """

    def __init__(self, config: DashboardConfig | None = None) -> None:
        self.config = config or DashboardConfig()
        self._parcels: FeatureCollection | None = None
        self._territories: FeatureCollection | None = None
        self._selection: RegionSelection = NO_FILTER
        self._listeners: list[StateListener] = []
        self._state = recompute(None, None, NO_FILTER, config=self.config)

    @property
    def state(self) -> DashboardState:
        """The state computed by the most recent trigger."""
        return self._state

    @property
    def selection(self) -> RegionSelection:
        return self._selection

    @property
    def parcels(self) -> FeatureCollection | None:
        """Unfiltered land-parcel source, or ``None`` while absent."""
        return self._parcels

    @property
    def territories(self) -> FeatureCollection | None:
        """Unfiltered territory source, or ``None`` while absent."""
        return self._territories

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for future states; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_parcels(self, collection: FeatureCollection | None) -> DashboardState:
        """Replace the land-parcel source and recompute."""
        self._parcels = collection
        return self._refresh("parcels")

    def set_territories(self, collection: FeatureCollection | None) -> DashboardState:
        """Replace the territory source and recompute."""
        self._territories = collection
        return self._refresh("territories")

    def set_selection(self, selection: Iterable[str]) -> DashboardState:
        """Replace the region selection and recompute.

        Raises:
            RegionSelectionError: If a code is not a known region code.
                The previous selection and state are kept.
        """
        self._selection = validate_selection(selection, self.config.known_region_codes)
        return self._refresh("selection")

    def toggle_region(self, code: str) -> DashboardState:
        """Add or remove one region code (checkbox semantics) and recompute."""
        return self.set_selection(toggle_region(self._selection, code))

    def load_sources(self) -> DashboardState:
        """Load both configured GeoJSON sources; unreadable ones stay absent.

        Both sources are read before either snapshot field is replaced.

        Raises:
            CollectionContractError: If a source is not a FeatureCollection.
                Inputs, state and subscribers are left untouched.
        """
        parcels = load_feature_collection(self.config.left_source_path)
        territories = load_feature_collection(self.config.right_source_path)
        self._parcels = parcels
        self._territories = territories
        return self._refresh("sources")

    def _refresh(self, trigger: str) -> DashboardState:
        logger.debug("Recompute triggered by %s", trigger)
        self._state = recompute(
            self._parcels,
            self._territories,
            self._selection,
            config=self.config,
        )
        for listener in list(self._listeners):
            listener(self._state)
        return self._state
