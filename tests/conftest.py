"""Shared pytest fixtures for the Land Overlap test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from land_overlap.models.feature import Feature, FeatureCollection

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def parcels_geojson(data_dir: Path) -> Path:
    """Path to a small parcels file (three parcels, one per region key name)."""
    return data_dir / "parcels.geojson"


@pytest.fixture()
def territories_geojson(data_dir: Path) -> Path:
    """Path to a small territories file (two territories)."""
    return data_dir / "territories.geojson"


# ---------------------------------------------------------------------------
# Geometry builders
# ---------------------------------------------------------------------------


def square(
    min_lon: float,
    min_lat: float,
    max_lon: float,
    max_lat: float,
    **properties: object,
) -> Feature:
    """Axis-aligned square/rectangle feature, counter-clockwise, closed."""
    ring = [
        [min_lon, min_lat],
        [max_lon, min_lat],
        [max_lon, max_lat],
        [min_lon, max_lat],
        [min_lon, min_lat],
    ]
    return Feature(
        geometry={"type": "Polygon", "coordinates": [ring]},
        properties=dict(properties),
    )


def collection(*features: Feature) -> FeatureCollection:
    return FeatureCollection(features=tuple(features))


# ---------------------------------------------------------------------------
# Sample collections
# ---------------------------------------------------------------------------


@pytest.fixture()
def square_a() -> FeatureCollection:
    """One square [0,0]-[2,2] in region X."""
    return collection(square(0, 0, 2, 2, sigla_uf="X"))


@pytest.fixture()
def square_b() -> FeatureCollection:
    """One square [1,1]-[3,3] in region Y."""
    return collection(square(1, 1, 3, 3, sigla_uf="Y"))


@pytest.fixture()
def parcels() -> FeatureCollection:
    """Four parcels across AM, PA and MG using all three region key names."""
    return collection(
        square(0, 0, 1, 1, sigla_uf="AM", name="p1"),
        square(1, 0, 2, 1, UF="PA", name="p2"),
        square(0, 1, 1, 2, estado="MG", name="p3"),
        square(1, 1, 2, 2, sigla_uf="AM", name="p4"),
    )


@pytest.fixture()
def territories() -> FeatureCollection:
    """Two territories overlapping the parcel grid."""
    return collection(
        square(0.5, 0.5, 1.5, 1.5, sigla_uf="AM", name="t1"),
        square(5, 5, 6, 6, sigla_uf="PA", name="t2"),
    )
