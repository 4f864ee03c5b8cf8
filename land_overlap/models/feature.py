"""Data model for GeoJSON features and feature collections.

A Feature is one geometric record (a land parcel or a territory
boundary) with its properties; a FeatureCollection is an ordered group
of them.  Both are immutable once loaded.

Structural validation happens here, at the boundary: a payload that is
not a FeatureCollection of Feature objects is rejected with
``CollectionContractError``.  Geometric problems inside an individual
geometry (empty rings, self-intersections, bad coordinates) are *not*
rejected; the engine degrades them to zero/empty contributions.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from land_overlap.core.exceptions import CollectionContractError

FEATURE_TYPE = "Feature"
COLLECTION_TYPE = "FeatureCollection"


@dataclass(frozen=True, slots=True)
class Feature:
    """A single GeoJSON feature.

    Attributes:
        geometry: GeoJSON geometry mapping (``type`` + ``coordinates``),
            or ``None`` for a feature without geometry.
        properties: Feature properties, including the region code under
            one of several possible key names.
    """

    geometry: dict[str, object] | None = None
    properties: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON Feature dict."""
        return {
            "type": FEATURE_TYPE,
            "geometry": self.geometry,
            "properties": dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: object, *, index: int = 0) -> Feature:
        """Deserialise from a GeoJSON Feature dict.

        ``properties: null`` is accepted and becomes ``{}``, as GeoJSON allows.

        Raises:
            CollectionContractError: If ``data`` is not a Feature object or
                its ``geometry``/``properties`` have the wrong shape.
        """
        if not isinstance(data, Mapping):
            msg = f"Feature {index} must be an object, got {type(data).__name__}"
            raise CollectionContractError(msg)

        if data.get("type") != FEATURE_TYPE:
            msg = f"Feature {index} has type {data.get('type')!r}, expected {FEATURE_TYPE!r}"
            raise CollectionContractError(msg)

        geometry = data.get("geometry")
        if geometry is not None and not isinstance(geometry, Mapping):
            msg = f"Feature {index} geometry must be an object or null, got {type(geometry).__name__}"
            raise CollectionContractError(msg)

        properties = data.get("properties")
        if properties is None:
            properties = {}
        if not isinstance(properties, Mapping):
            msg = (
                f"Feature {index} properties must be an object or null, "
                f"got {type(properties).__name__}"
            )
            raise CollectionContractError(msg)

        return cls(
            geometry=dict(geometry) if geometry is not None else None,
            properties=dict(properties),
        )

    @property
    def geometry_type(self) -> str:
        """GeoJSON geometry type, or ``""`` when there is no geometry."""
        if self.geometry is None:
            return ""
        return str(self.geometry.get("type", ""))


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """An ordered, immutable group of features.

    An empty collection is valid and means "no data" or "no matches".
    Order carries no meaning but is preserved for rendering stability.
    """

    features: tuple[Feature, ...] = ()

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    @property
    def is_empty(self) -> bool:
        return not self.features

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON FeatureCollection dict."""
        return {
            "type": COLLECTION_TYPE,
            "features": [f.to_dict() for f in self.features],
        }

    @classmethod
    def from_dict(cls, data: object) -> FeatureCollection:
        """Deserialise and structurally validate a GeoJSON FeatureCollection.

        Raises:
            CollectionContractError: If ``data`` is not a FeatureCollection,
                ``features`` is missing or not a list, or any element is
                not a Feature object.
        """
        if not isinstance(data, Mapping):
            msg = f"FeatureCollection must be an object, got {type(data).__name__}"
            raise CollectionContractError(msg)

        if data.get("type") != COLLECTION_TYPE:
            msg = f"Expected type {COLLECTION_TYPE!r}, got {data.get('type')!r}"
            raise CollectionContractError(msg)

        features_raw = data.get("features")
        if not isinstance(features_raw, list):
            msg = f"features must be a list, got {type(features_raw).__name__}"
            raise CollectionContractError(msg)

        return cls(
            features=tuple(Feature.from_dict(f, index=i) for i, f in enumerate(features_raw))
        )
