"""Shared dashboard constants — single source of truth.

Centralises the region-code property names, the known region codes,
unit conversions and map layer styling that would otherwise be
duplicated across the engine, the session and the HTTP wiring.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Region code resolution
# ---------------------------------------------------------------------------

REGION_CODE_KEYS: tuple[str, ...] = ("sigla_uf", "UF", "estado")
"""Property names holding the region code, in lookup precedence order.

Upstream sources disagree on naming; the first key with a non-empty
value wins.
"""

KNOWN_REGION_CODES: tuple[str, ...] = ("AM", "PA", "MG")
"""Region codes offered for filtering and enumerated on chart axes."""

# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

SQ_METRES_PER_SQ_KM: float = 1_000_000.0

# ---------------------------------------------------------------------------
# Default sources
# ---------------------------------------------------------------------------

DEFAULT_LEFT_SOURCE: str = "data/imoveis_fake_100.geojson"
"""Rural land parcels (the left side of every intersection)."""

DEFAULT_RIGHT_SOURCE: str = "data/terras_indigenas_fake.geojson"
"""Indigenous territory boundaries (the right side)."""

DEFAULT_FIT_BOUNDS_PADDING_PX: int = 50

# ---------------------------------------------------------------------------
# Map layers
# ---------------------------------------------------------------------------

PARCELS_LAYER: str = "parcels"
TERRITORIES_LAYER: str = "territories"
INTERSECTION_LAYER: str = "intersection"

LAYER_STYLES: dict[str, dict[str, object]] = {
    PARCELS_LAYER: {"color": "blue", "weight": 1, "fillOpacity": 0.3},
    TERRITORIES_LAYER: {"color": "green", "weight": 1, "fillOpacity": 0.3},
    INTERSECTION_LAYER: {"color": "red", "weight": 2, "fillOpacity": 0.4},
}

# ---------------------------------------------------------------------------
# Chart labels
# ---------------------------------------------------------------------------

REGION_COUNT_HEADER: tuple[str, str] = ("Estado", "Número de Imóveis")
AREA_BY_TYPE_HEADER: tuple[str, str] = ("Tipo", "Área (km²)")
PARCELS_LABEL: str = "Imóveis"
TERRITORIES_LABEL: str = "Terras Indígenas"
INTERSECTION_LABEL: str = "Interseção"
