"""
Map View - Coordinate Projection and Rendering
Handles lat/lon to screen projection, zoom/pan, and rendering of map elements.
"""

import math

import numpy as np
import pygame

from core.bookmarks import Viewpoint
from core.geodesy import move, normalize_angle
from config import (
    CAMERA_START_LAT,
    CAMERA_START_LON,
    CAMERA_START_SCALE,
    COLOR_BOOKMARK,
    COLOR_FEATURE,
    COLOR_FEATURE_OUTLINE,
    COLOR_TRACK,
    COLOR_VIEW_CONE,
    COLOR_WAYPOINT,
    COLOR_WHITE,
    MAP_ZOOM_MAX,
    MAP_ZOOM_MIN,
    MAP_ZOOM_STEP,
    METERS_PER_DEGREE_LAT,
    SCREEN_DPI,
    VIEW_ARC_SEGMENTS,
    VIEW_HEADING_OFFSET,
    VIEW_HORIZONTAL_ANGLE,
    VIEW_MAX_DISTANCE_M,
    VIEWPORT_CULL_MARGIN,
)

METERS_PER_INCH = 0.0254


def scale_to_pixels_per_meter(scale):
    """Pixels per ground meter for a map scale denominator."""
    return SCREEN_DPI / METERS_PER_INCH / scale


class MapView:
    """
    Manages map projection, zoom/pan, and rendering of geographic elements.
    """

    def __init__(self, map_width, map_height, basemap=None,
                 center_lat=CAMERA_START_LAT, center_lon=CAMERA_START_LON,
                 scale=CAMERA_START_SCALE):
        """
        Initialize map view.

        Args:
            map_width: Map surface width in pixels
            map_height: Map surface height in pixels
            basemap: Optional BasemapProvider instance
            center_lat, center_lon: Initial camera center
            scale: Initial map scale denominator
        """
        self.basemap = basemap
        self.width = map_width
        self.height = map_height

        # Camera state
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.base_scale = scale_to_pixels_per_meter(CAMERA_START_SCALE)
        self.zoom = 1.0
        self.set_scale(scale)

        self.show_view_cone = True
        self._fonts = {}

        print(f"Map view initialized: {map_width}x{map_height} pixels")
        print(f"  Center: ({self.center_lat:.4f}, {self.center_lon:.4f})")
        print(f"  Scale: 1:{self.current_scale():.0f}")

    # ==================== Projection ====================

    @property
    def pixels_per_meter(self):
        return self.base_scale * self.zoom

    def latlon_to_screen(self, lat, lon):
        """
        Convert lat/lon to screen coordinates.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            (screen_x, screen_y) tuple in pixels
        """
        dx_m = (lon - self.center_lon) * METERS_PER_DEGREE_LAT * math.cos(math.radians(self.center_lat))
        dy_m = (lat - self.center_lat) * METERS_PER_DEGREE_LAT

        screen_x = self.width / 2 + dx_m * self.pixels_per_meter
        screen_y = self.height / 2 - dy_m * self.pixels_per_meter  # Flip Y axis

        return (screen_x, screen_y)

    def screen_to_latlon(self, screen_x, screen_y):
        """
        Convert screen coordinates to lat/lon (inverse projection).

        Args:
            screen_x: X pixel coordinate
            screen_y: Y pixel coordinate

        Returns:
            (lat, lon) tuple in degrees
        """
        dx_m = (screen_x - self.width / 2) / self.pixels_per_meter
        dy_m = -(screen_y - self.height / 2) / self.pixels_per_meter  # Flip Y axis

        lat = self.center_lat + dy_m / METERS_PER_DEGREE_LAT
        lon = self.center_lon + dx_m / (METERS_PER_DEGREE_LAT * math.cos(math.radians(self.center_lat)))

        return (lat, lon)

    def contains(self, screen_x, screen_y):
        return 0 <= screen_x < self.width and 0 <= screen_y < self.height

    # ==================== Camera ====================

    def current_scale(self):
        """Current map scale denominator."""
        return CAMERA_START_SCALE / self.zoom

    def set_scale(self, scale):
        self.zoom = max(MAP_ZOOM_MIN, min(MAP_ZOOM_MAX, CAMERA_START_SCALE / scale))

    def current_viewpoint(self):
        """Viewpoint for the current camera (used when adding bookmarks)."""
        return Viewpoint(self.center_lat, self.center_lon, self.current_scale())

    def set_viewpoint(self, viewpoint):
        """Move the camera to a Viewpoint."""
        self.center_lat = viewpoint.lat
        self.center_lon = viewpoint.lon
        self.set_scale(viewpoint.scale)

    def center_on(self, lat, lon):
        self.center_lat = lat
        self.center_lon = lon

    def pan(self, dx_px, dy_px):
        """
        Pan the camera by a screen-space drag.

        Args:
            dx_px: Horizontal drag in pixels (positive = content moves right)
            dy_px: Vertical drag in pixels (positive = content moves down)
        """
        lat, lon = self.screen_to_latlon(self.width / 2 - dx_px, self.height / 2 - dy_px)
        self.center_on(lat, lon)

    def zoom_in(self):
        self.zoom = min(MAP_ZOOM_MAX, self.zoom * MAP_ZOOM_STEP)

    def zoom_out(self):
        self.zoom = max(MAP_ZOOM_MIN, self.zoom / MAP_ZOOM_STEP)

    def get_viewport_dimensions_m(self):
        """Viewport (width, height) in ground meters."""
        return (self.width / self.pixels_per_meter, self.height / self.pixels_per_meter)

    # ==================== Rendering ====================

    def _font(self, size, bold=False):
        key = (size, bold)
        if key not in self._fonts:
            self._fonts[key] = pygame.font.SysFont('monospace', size, bold=bold)
        return self._fonts[key]

    def _to_points(self, coords):
        points = []
        for lon, lat in coords:
            screen_x, screen_y = self.latlon_to_screen(lat, lon)
            points.append((int(screen_x), int(screen_y)))
        return points

    def render_basemap(self, surface):
        """
        Render basemap features with viewport culling.

        Args:
            surface: Pygame surface to draw on
        """
        if self.basemap is None:
            return

        width_m, height_m = self.get_viewport_dimensions_m()
        geometries = self.basemap.get_visible_features(
            self.center_lat,
            self.center_lon,
            width_m * VIEWPORT_CULL_MARGIN,
            height_m * VIEWPORT_CULL_MARGIN
        )

        for geom in geometries:
            self._render_geometry(surface, geom)

    def _render_geometry(self, surface, geom):
        if geom is None or geom.is_empty:
            return

        if geom.geom_type == 'LineString':
            points = self._to_points(geom.coords)
            if len(points) >= 2:
                pygame.draw.lines(surface, COLOR_FEATURE, False, points, 1)

        elif geom.geom_type == 'Polygon':
            points = self._to_points(geom.exterior.coords)
            if len(points) >= 3:
                pygame.draw.polygon(surface, COLOR_FEATURE, points)
                pygame.draw.polygon(surface, COLOR_FEATURE_OUTLINE, points, 1)

        elif geom.geom_type == 'Point':
            screen_x, screen_y = self.latlon_to_screen(geom.y, geom.x)
            pygame.draw.circle(surface, COLOR_FEATURE_OUTLINE, (int(screen_x), int(screen_y)), 2)

        elif geom.geom_type.startswith('Multi') or geom.geom_type == 'GeometryCollection':
            for part in geom.geoms:
                self._render_geometry(surface, part)

    def render_tank(self, surface, tank):
        """
        Render tank as triangle pointing in heading direction.

        Args:
            surface: Pygame surface
            tank: Tank instance
        """
        lat, lon = tank.current_position()
        screen_x, screen_y = self.latlon_to_screen(lat, lon)

        # Nautical: 0°=N, 90°=E (clockwise from north)
        # Screen: 0°=right, counterclockwise with Y flipped
        angle_rad = math.radians(90 - tank.current_heading())

        size = 14  # Triangle size in pixels

        nose_x = screen_x + size * math.cos(angle_rad)
        nose_y = screen_y - size * math.sin(angle_rad)

        base_left_x = screen_x + size * 0.7 * math.cos(angle_rad + 2.5)
        base_left_y = screen_y - size * 0.7 * math.sin(angle_rad + 2.5)

        base_right_x = screen_x + size * 0.7 * math.cos(angle_rad - 2.5)
        base_right_y = screen_y - size * 0.7 * math.sin(angle_rad - 2.5)

        vertices = [
            (int(nose_x), int(nose_y)),
            (int(base_left_x), int(base_left_y)),
            (int(base_right_x), int(base_right_y))
        ]

        pygame.draw.polygon(surface, tank.color, vertices)
        pygame.draw.polygon(surface, COLOR_WHITE, vertices, 2)

        # Name label
        name_text = self._font(11, bold=True).render(tank.name, True, COLOR_WHITE)
        surface.blit(name_text, (int(screen_x) + 16, int(screen_y) - 18))

    def view_cone_points(self, tank):
        """
        Outline of the tank's field of view as (lat, lon) points.

        Apex at the tank, arc at VIEW_MAX_DISTANCE_M spanning
        VIEW_HORIZONTAL_ANGLE around the tank heading.
        """
        lat, lon = tank.current_position()
        center = normalize_angle(tank.current_heading() + VIEW_HEADING_OFFSET)
        half = VIEW_HORIZONTAL_ANGLE / 2

        azimuths = np.linspace(center - half, center + half, VIEW_ARC_SEGMENTS + 1)

        points = [(lat, lon)]
        for azimuth in azimuths:
            points.append(move(lat, lon, float(azimuth), VIEW_MAX_DISTANCE_M))
        points.append((lat, lon))
        return points

    def render_view_cone(self, surface, tank):
        if not self.show_view_cone:
            return

        points = [self.latlon_to_screen(lat, lon) for lat, lon in self.view_cone_points(tank)]
        points = [(int(x), int(y)) for x, y in points]
        pygame.draw.lines(surface, COLOR_VIEW_CONE, False, points, 1)

    def render_breadcrumbs(self, surface, tank):
        """
        Render breadcrumb trail.

        Args:
            surface: Pygame surface
            tank: Tank instance
        """
        if len(tank.breadcrumbs) < 2:
            return

        points = []
        for lat, lon in tank.breadcrumbs:
            screen_x, screen_y = self.latlon_to_screen(lat, lon)
            points.append((int(screen_x), int(screen_y)))

        pygame.draw.lines(surface, COLOR_TRACK, False, points, 2)

    def render_waypoint(self, surface, tank):
        """
        Render the pending waypoint and a line from the tank to it.

        Args:
            surface: Pygame surface
            tank: Tank instance
        """
        waypoint = tank.waypoint
        if waypoint is None:
            return

        screen_x, screen_y = self.latlon_to_screen(waypoint.lat, waypoint.lon)
        tank_x, tank_y = self.latlon_to_screen(tank.lat, tank.lon)

        pygame.draw.line(surface, COLOR_WAYPOINT, (int(tank_x), int(tank_y)),
                         (int(screen_x), int(screen_y)), 1)
        pygame.draw.circle(surface, COLOR_WAYPOINT, (int(screen_x), int(screen_y)), 7)
        pygame.draw.circle(surface, COLOR_WHITE, (int(screen_x), int(screen_y)), 7, 2)

    def render_bookmarks(self, surface, bookmarks):
        """
        Render bookmark locations as small diamonds with names.

        Args:
            surface: Pygame surface
            bookmarks: BookmarkList instance
        """
        font = self._font(10)
        for bookmark in bookmarks:
            screen_x, screen_y = self.latlon_to_screen(bookmark.viewpoint.lat, bookmark.viewpoint.lon)
            if not self.contains(screen_x, screen_y):
                continue

            x, y = int(screen_x), int(screen_y)
            diamond = [(x, y - 5), (x + 5, y), (x, y + 5), (x - 5, y)]
            pygame.draw.polygon(surface, COLOR_BOOKMARK, diamond)

            label = font.render(bookmark.name, True, COLOR_BOOKMARK)
            surface.blit(label, (x + 8, y - 6))
