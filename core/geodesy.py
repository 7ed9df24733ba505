"""
Geodesy Functions
Pure functions for angles and geodesic bearing/distance on the WGS84 ellipsoid.
No state - all functions are side-effect free.
"""

import math
from dataclasses import dataclass

from geographiclib.geodesic import Geodesic


# ==================== Angles ====================

def normalize_angle(angle):
    """
    Normalize angle to [0, 360) range.

    Args:
        angle: Angle in degrees

    Returns:
        Normalized angle in [0, 360)
    """
    normalized = angle % 360
    # -1e-17 % 360 rounds to 360.0
    if normalized >= 360:
        normalized = 0.0
    return normalized


def angle_difference(angle1, angle2):
    """
    Calculate shortest angular distance from angle1 to angle2.
    Handles wraparound (e.g., 350° to 10° is +20°, not +340°).

    Args:
        angle1: First angle in degrees
        angle2: Second angle in degrees

    Returns:
        Difference in degrees, range [-180, 180)
        Positive = clockwise from angle1 to angle2
        Negative = counterclockwise from angle1 to angle2
    """
    return (angle2 - angle1 + 180) % 360 - 180


# ==================== Coordinates ====================

def is_valid_coordinate(lat, lon):
    """
    Check that a (lat, lon) pair is a usable WGS84 coordinate.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if both values are finite numbers within range
    """
    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        return False

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False

    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


# ==================== Distance and Bearing ====================

@dataclass(frozen=True)
class GeodesicResult:
    """Result of an inverse geodesic problem."""
    distance_m: float
    azimuth1: float  # initial bearing at the start point, [0, 360)


def inverse(lat1, lon1, lat2, lon2):
    """
    Solve the inverse geodesic problem between two points.

    Args:
        lat1, lon1: Start point in degrees
        lat2, lon2: End point in degrees

    Returns:
        GeodesicResult with distance in meters and initial azimuth in degrees
    """
    result = Geodesic.WGS84.Inverse(lat1, lon1, lat2, lon2)
    return GeodesicResult(
        distance_m=result['s12'],
        azimuth1=normalize_angle(result['azi1'])
    )


def distance_m(lat1, lon1, lat2, lon2):
    """Geodesic distance between two points in meters."""
    return inverse(lat1, lon1, lat2, lon2).distance_m


def bearing(lat1, lon1, lat2, lon2):
    """Initial geodesic bearing from point 1 to point 2, degrees [0, 360)."""
    return inverse(lat1, lon1, lat2, lon2).azimuth1


def move(lat, lon, azimuth, distance):
    """
    Move from a point along a geodesic.

    Args:
        lat: Start latitude in degrees
        lon: Start longitude in degrees
        azimuth: Direction of travel in degrees (0=North, clockwise)
        distance: Distance to travel in meters

    Returns:
        (new_lat, new_lon) tuple, longitude in [-180, 180]
    """
    result = Geodesic.WGS84.Direct(lat, lon, azimuth, distance)
    new_lon = (result['lon2'] + 180) % 360 - 180
    return (result['lat2'], new_lon)
