"""Region filter.

Resolves each feature's administrative region code and keeps the
features whose code is in the active selection.

Region codes live under one of several property names because upstream
sources disagree on naming.  The names are tried in a fixed precedence
order (``REGION_CODE_KEYS``) and the first non-empty value wins.

A selection is a ``frozenset`` of codes.  The empty selection means
"no filter": every feature passes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from land_overlap.core.constants import REGION_CODE_KEYS
from land_overlap.models.feature import Feature, FeatureCollection

logger = logging.getLogger("land_overlap.engine.region_filter")

RegionSelection = frozenset[str]

NO_FILTER: RegionSelection = frozenset()


def resolve_region_code(feature: Feature, keys: Iterable[str] = REGION_CODE_KEYS) -> str:
    """Return the feature's region code, or ``""`` if none is set.

    Keys are tried in order; a key that is missing, ``None`` or blank
    falls through to the next one.
    """
    for key in keys:
        value = feature.properties.get(key)
        if value:
            return str(value)
    return ""


def filter_by_region(
    collection: FeatureCollection | None,
    selection: RegionSelection,
    *,
    keys: Iterable[str] = REGION_CODE_KEYS,
) -> FeatureCollection | None:
    """Keep only the features whose region code is in ``selection``.

    Args:
        collection: Source features, or ``None`` while not yet loaded.
        selection: Active region codes.  Empty means no filter.
        keys: Region-code property names in precedence order.

    Returns:
        ``None`` if ``collection`` is ``None``; ``collection`` itself if
        ``selection`` is empty; otherwise a new collection holding the
        matching features in their original order.
    """
    if collection is None:
        return None
    if not selection:
        return collection

    keys = tuple(keys)
    kept = tuple(f for f in collection if resolve_region_code(f, keys) in selection)
    logger.debug(
        "Region filter | selection=%s | kept=%d of %d",
        ",".join(sorted(selection)),
        len(kept),
        len(collection),
    )
    return FeatureCollection(features=kept)


def toggle_region(selection: RegionSelection, code: str) -> RegionSelection:
    """Return a new selection with ``code`` added, or removed if already present."""
    if code in selection:
        return selection - {code}
    return selection | {code}
