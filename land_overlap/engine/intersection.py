"""Intersection engine.

Computes every non-empty pairwise intersection between two feature
collections.  The search is a full cross product, O(len(left) x
len(right)), with no spatial index and no bounding-box prefilter beyond
what Shapely does inside each ``intersects`` call.  That is a scaling
limit for large inputs, acceptable for the dashboard's dataset sizes.

Output features are kept exactly as produced, one per overlapping pair,
in visit order (left outer loop, right inner loop).  Coincident or
adjacent results are not merged.
"""

from __future__ import annotations

import logging

from land_overlap.engine.geometry import intersect
from land_overlap.models.feature import Feature, FeatureCollection

logger = logging.getLogger("land_overlap.engine.intersection")


def intersect_all(
    left: FeatureCollection | None,
    right: FeatureCollection | None,
) -> FeatureCollection:
    """Intersect every feature of ``left`` with every feature of ``right``.

    Each resulting feature carries the properties of its ``left`` feature.
    Pairs that do not overlap, or whose geometry cannot be processed,
    contribute nothing.

    Args:
        left: Left-hand collection (land parcels), or ``None``.
        right: Right-hand collection (territories), or ``None``.

    Returns:
        A present, possibly empty, collection.  Absent or empty inputs
        give an empty collection rather than an error.
    """
    if left is None or right is None or left.is_empty or right.is_empty:
        return FeatureCollection()

    intersections: list[Feature] = []
    for left_feature in left:
        for right_feature in right:
            overlap = intersect(left_feature, right_feature, properties=left_feature.properties)
            if overlap is not None:
                intersections.append(overlap)

    logger.info(
        "Intersection computed | left=%d | right=%d | pairs=%d | intersections=%d",
        len(left),
        len(right),
        len(left) * len(right),
        len(intersections),
    )
    return FeatureCollection(features=tuple(intersections))
