"""
Shared fixtures: LGA features and a small GeoJSON dataset on disk.
"""

import json

import pytest

from models import Feature


SQUARE = {
    "type": "Polygon",
    "coordinates": [[[144.9, -37.8], [145.0, -37.8], [145.0, -37.9], [144.9, -37.9], [144.9, -37.8]]],
}


def make_properties(**overrides):
    props = {
        "LGA": "Yarra",
        "Curr": 1000,
        "Add": 234.6,
        "PcInc": 0.15,
        "ReqYearly": 823.4,
        "HistYearly": 500,
        "MultiNeed": 1.647,
        "Shortfall": -0.12,
        "Cat": 3,
    }
    props.update(overrides)
    return props


@pytest.fixture
def reference_feature():
    """The worked example used throughout the popup tests."""
    return Feature(**make_properties(LGA="X"))


@pytest.fixture
def geojson_data():
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": SQUARE, "properties": make_properties()},
            {
                "type": "Feature",
                "geometry": SQUARE,
                "properties": make_properties(LGA="Casey", MultiNeed=0.9, Shortfall=0.05, Cat=1),
            },
            {
                "type": "Feature",
                "geometry": SQUARE,
                "properties": make_properties(LGA="Broken", MultiNeed="n/a"),
            },
        ],
    }


@pytest.fixture
def geojson_file(tmp_path, geojson_data):
    path = tmp_path / "DataWebMerc.geojson"
    path.write_text(json.dumps(geojson_data), encoding="utf-8")
    return path
