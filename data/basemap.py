"""
Basemap Provider
Loads GeoJSON city features (buildings, streets, parks) and provides viewport queries.
Uses R-tree spatial indexing so only on-screen features are rendered.
"""

import math
import os

import geopandas as gpd
from shapely.geometry import box

from config import BASEMAP_PATH, METERS_PER_DEGREE_LAT


class BasemapProvider:
    """
    Manages 2D basemap features for the map view.
    A missing basemap file leaves the provider empty; the simulator still runs.
    """

    def __init__(self, geojson_path=BASEMAP_PATH):
        """
        Load GeoJSON features and build spatial index.

        Args:
            geojson_path: Path to GeoJSON file with basemap features
        """
        self.path = geojson_path
        self.gdf = None
        self.sindex = None

        if not geojson_path or not os.path.exists(geojson_path):
            print(f"Warning: Basemap {geojson_path!r} not found, rendering without basemap")
            return

        print(f"Loading basemap from {geojson_path}...")

        # Load GeoJSON with geopandas
        self.gdf = gpd.read_file(geojson_path)

        # Build R-tree spatial index for fast queries
        self.sindex = self.gdf.sindex

        print(f"✓ Loaded {len(self.gdf)} basemap features")

    @property
    def is_empty(self):
        return self.gdf is None or len(self.gdf) == 0

    def get_bounds(self):
        """
        Get bounding box of the basemap.

        Returns:
            (min_lat, min_lon, max_lat, max_lon) tuple, or None if empty
        """
        if self.is_empty:
            return None
        min_lon, min_lat, max_lon, max_lat = self.gdf.total_bounds
        return (min_lat, min_lon, max_lat, max_lon)

    def get_visible_features(self, center_lat, center_lon, width_m, height_m):
        """
        Get features visible in a viewport (for rendering).

        Args:
            center_lat: Viewport center latitude
            center_lon: Viewport center longitude
            width_m: Viewport width in meters
            height_m: Viewport height in meters

        Returns:
            List of shapely geometries intersecting the viewport
        """
        if self.is_empty:
            return []

        # Convert meters to degrees (approximate)
        width_deg = width_m / (METERS_PER_DEGREE_LAT * math.cos(math.radians(center_lat)))
        height_deg = height_m / METERS_PER_DEGREE_LAT

        viewport_box = box(
            center_lon - width_deg / 2,
            center_lat - height_deg / 2,
            center_lon + width_deg / 2,
            center_lat + height_deg / 2
        )

        # R-tree query: get indices of features whose bounding boxes intersect
        indices = list(self.sindex.intersection(viewport_box.bounds))

        if not indices:
            return []

        return list(self.gdf.iloc[indices].geometry)
