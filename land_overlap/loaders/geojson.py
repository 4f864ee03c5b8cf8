"""GeoJSON source loader.

Reads a GeoJSON FeatureCollection file into a ``FeatureCollection``.

Two failure classes are kept apart:

- An unreadable or undecodable file is a *load failure*.  The dashboard
  treats it as "collection absent" (``load_feature_collection`` returns
  ``None``) and keeps running with less data.
- A readable JSON document that is not a FeatureCollection is a
  *contract violation* and fails fast with ``CollectionContractError``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from land_overlap.core.exceptions import DataSourceError
from land_overlap.models.feature import FeatureCollection

logger = logging.getLogger("land_overlap.loaders.geojson")


def read_feature_collection(path: Path | str) -> FeatureCollection:
    """Read and validate a GeoJSON FeatureCollection file.

    Args:
        path: Filesystem path to the ``.geojson`` file (str or pathlib.Path).

    Returns:
        The parsed collection (possibly empty).

    Raises:
        DataSourceError: If the file cannot be read or is not valid JSON.
        CollectionContractError: If the JSON is not a FeatureCollection.
    """
    path = Path(path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read source file {path}: {exc}"
        raise DataSourceError(msg) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        msg = f"Source file {path} is not valid JSON: {exc}"
        raise DataSourceError(msg) from exc

    collection = FeatureCollection.from_dict(data)
    logger.info("Loaded %d feature(s) from %s", len(collection), path.name)
    return collection


def load_feature_collection(path: Path | str) -> FeatureCollection | None:
    """Load a source file, returning ``None`` if it cannot be read.

    Raises:
        CollectionContractError: If the file is readable JSON but not a
            FeatureCollection.
    """
    try:
        return read_feature_collection(path)
    except DataSourceError as exc:
        logger.warning("Source unavailable, treating as absent: %s", exc)
        return None
