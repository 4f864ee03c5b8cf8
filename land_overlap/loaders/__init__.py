"""Source loaders: read GeoJSON files into feature collections."""

from land_overlap.loaders.geojson import load_feature_collection, read_feature_collection

__all__ = ["load_feature_collection", "read_feature_collection"]
