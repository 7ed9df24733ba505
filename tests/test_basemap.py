"""Tests for data.basemap - GeoJSON loading and viewport queries."""

import json

import pytest

from data.basemap import BasemapProvider


@pytest.fixture
def geojson_path(tmp_path):
    features = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Champ de Mars"},
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[
                        [2.2950, 48.8560], [2.3000, 48.8530], [2.3020, 48.8545],
                        [2.2970, 48.8575], [2.2950, 48.8560]
                    ]],
                },
            },
            {
                "type": "Feature",
                "properties": {"name": "Rue de Rivoli"},
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[2.3300, 48.8640], [2.3550, 48.8560]],
                },
            },
        ],
    }
    path = tmp_path / "paris.geojson"
    path.write_text(json.dumps(features))
    return str(path)


def test_loads_features(geojson_path):
    basemap = BasemapProvider(geojson_path)

    assert not basemap.is_empty
    min_lat, min_lon, max_lat, max_lon = basemap.get_bounds()
    assert min_lat == pytest.approx(48.8530)
    assert max_lon == pytest.approx(2.3550)


def test_viewport_query_returns_only_visible(geojson_path):
    basemap = BasemapProvider(geojson_path)

    near_eiffel = basemap.get_visible_features(48.8550, 2.2980, 600, 600)
    assert [geom.geom_type for geom in near_eiffel] == ['Polygon']

    nowhere = basemap.get_visible_features(48.90, 2.40, 500, 500)
    assert nowhere == []


def test_missing_file_gives_empty_basemap(tmp_path):
    basemap = BasemapProvider(str(tmp_path / "missing.geojson"))

    assert basemap.is_empty
    assert basemap.get_bounds() is None
    assert basemap.get_visible_features(48.85, 2.35, 1000, 1000) == []
