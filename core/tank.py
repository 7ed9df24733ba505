"""
Tank State Management
Mobile actor that pursues a single pending waypoint one geodesic step per tick.
"""

from core.geodesy import (
    angle_difference,
    inverse,
    is_valid_coordinate,
    move,
    normalize_angle,
)
from core.waypoint import Waypoint, WaypointStore
from config import (
    ARRIVAL_THRESHOLD_M,
    COLOR_TANK,
    DEBUG_MODE,
    HEADING_BLEND_DIVISOR,
    HEADING_BLEND_MODE,
    HEADING_BLEND_MODES,
    MAX_BREADCRUMBS,
    STEP_DISTANCE_M,
)


class Tank:
    """
    Represents a ground vehicle with a position, a heading and one pending waypoint.
    """

    def __init__(self, lat, lon, heading, name="Tank", color=COLOR_TANK,
                 step_distance_m=STEP_DISTANCE_M,
                 blend_divisor=HEADING_BLEND_DIVISOR,
                 arrival_threshold_m=ARRIVAL_THRESHOLD_M,
                 blend_mode=HEADING_BLEND_MODE):
        """
        Initialize tank at given position and heading.

        Args:
            lat: Initial latitude in degrees
            lon: Initial longitude in degrees
            heading: Initial heading in degrees (0=North, clockwise), any range
            name: Tank name for display
            color: RGB tuple for tank color
            step_distance_m: Distance moved per tick in meters
            blend_divisor: Heading closes 1/blend_divisor of the gap per tick
            arrival_threshold_m: Waypoint is reached at or below this distance
            blend_mode: 'shortest' or 'naive' heading blending

        Raises:
            ValueError: If the start position or a tuning constant is invalid
        """
        if not is_valid_coordinate(lat, lon):
            raise ValueError(f"Invalid start position: ({lat}, {lon})")
        if blend_mode not in HEADING_BLEND_MODES:
            raise ValueError(f"Unknown heading blend mode: '{blend_mode}'. "
                             f"Available: {list(HEADING_BLEND_MODES)}")
        if blend_divisor <= 0:
            raise ValueError("blend_divisor must be positive")
        if step_distance_m < 0 or arrival_threshold_m < 0:
            raise ValueError("step distance and arrival threshold must not be negative")

        # Identification
        self.name = name
        self.color = color

        # Tuning
        self.step_distance_m = step_distance_m
        self.blend_divisor = blend_divisor
        self.arrival_threshold_m = arrival_threshold_m
        self.blend_mode = blend_mode

        # Position
        self.lat = float(lat)
        self.lon = float(lon)
        self.heading = heading

        # Navigation
        self.waypoints = WaypointStore()
        self.breadcrumbs = []  # List of (lat, lon) tuples for track

        # Statistics
        self.distance_m = 0.0  # Total distance traveled (meters)
        self.ticks = 0  # Number of step() calls
        self.arrivals = 0  # Waypoints reached

        print(f"{name} initialized at ({self.lat:.6f}, {self.lon:.6f}), "
              f"heading {self.heading:.0f}° ({blend_mode} blend)")

    @property
    def heading(self):
        """Heading in degrees [0, 360)."""
        return normalize_angle(self._raw_heading)

    @heading.setter
    def heading(self, value):
        # Kept as given; naive blending subtracts from the unwrapped value
        self._raw_heading = float(value)

    # ==================== Waypoint ====================

    def set_waypoint(self, lat, lon, name=""):
        """
        Set the pending waypoint, replacing any previous one.

        Malformed coordinates are discarded and the pending waypoint is left
        as it was.

        Args:
            lat: Waypoint latitude
            lon: Waypoint longitude
            name: Optional name for the waypoint

        Returns:
            True if the waypoint was accepted, False if it was discarded
        """
        if not is_valid_coordinate(lat, lon):
            print(f"Warning: Discarded malformed waypoint ({lat}, {lon})")
            return False

        self.waypoints.set(Waypoint(float(lat), float(lon), name))
        print(f"Waypoint set: {name or 'target'} at ({float(lat):.6f}, {float(lon):.6f})")
        return True

    def clear_waypoint(self):
        """Cancel the pending waypoint. Returns True if one was pending."""
        waypoint = self.waypoints.clear()
        if waypoint is not None:
            print("Waypoint cancelled")
        return waypoint is not None

    @property
    def waypoint(self):
        """The pending Waypoint, or None when idle."""
        return self.waypoints.peek()

    @property
    def has_waypoint(self):
        return self.waypoints.is_pending

    def distance_to_waypoint(self):
        """
        Get geodesic distance to the pending waypoint.

        Returns:
            Distance in meters, or None if idle
        """
        waypoint = self.waypoint
        if waypoint is None:
            return None
        return inverse(self.lat, self.lon, waypoint.lat, waypoint.lon).distance_m

    def bearing_to_waypoint(self):
        """Initial geodesic bearing to the pending waypoint, or None if idle."""
        waypoint = self.waypoint
        if waypoint is None:
            return None
        return inverse(self.lat, self.lon, waypoint.lat, waypoint.lon).azimuth1

    # ==================== Motion ====================

    def step(self):
        """
        Advance one tick toward the pending waypoint.

        Called by the scheduler every TICK_INTERVAL. Does nothing when idle.
        When the distance measured before moving is within the arrival
        threshold the waypoint is cleared and the tank stays put.

        Returns:
            True if the tank moved
        """
        self.ticks += 1

        waypoint = self.waypoints.peek()
        if waypoint is None:
            return False

        if not is_valid_coordinate(waypoint.lat, waypoint.lon):
            self.waypoints.clear_if(waypoint)
            return False

        result = inverse(self.lat, self.lon, waypoint.lat, waypoint.lon)

        # Reached waypoint, stop moving
        if result.distance_m <= self.arrival_threshold_m:
            if self.waypoints.clear_if(waypoint):
                self.arrivals += 1
                print(f"{self.name} reached {waypoint.name or 'waypoint'} "
                      f"({result.distance_m:.1f} m)")
            return False

        # Move toward waypoint a short distance
        self.lat, self.lon = move(self.lat, self.lon, result.azimuth1, self.step_distance_m)
        self.distance_m += self.step_distance_m

        # Rotate toward waypoint
        self.heading = self.blend_heading(self._raw_heading, result.azimuth1)

        if DEBUG_MODE:
            print(f"[{self.ticks}] {self!r} bearing {result.azimuth1:.1f}° "
                  f"remaining {result.distance_m:.1f} m")

        return True

    def blend_heading(self, heading, target_bearing):
        """
        Turn a fraction of the way from heading toward target_bearing.

        In naive mode the bearing is subtracted from the unwrapped heading
        and the result is left unwrapped, so a tank started at -60° keeps
        blending from -60° rather than from 300°.

        Args:
            heading: Current heading in degrees, any range
            target_bearing: Bearing to the waypoint in degrees

        Returns:
            New heading: unwrapped in naive mode, in [0, 360) otherwise
        """
        if self.blend_mode == 'naive':
            return heading + (target_bearing - heading) / self.blend_divisor

        delta = angle_difference(heading, target_bearing)
        return normalize_angle(heading + delta / self.blend_divisor)

    # ==================== Observers ====================

    def current_position(self):
        """Current (lat, lon) in degrees."""
        return (self.lat, self.lon)

    def current_heading(self):
        """Current heading in degrees [0, 360)."""
        return self.heading

    def add_breadcrumb(self):
        """Add current position to breadcrumb trail."""
        self.breadcrumbs.append((self.lat, self.lon))

        # Limit breadcrumb trail length
        if len(self.breadcrumbs) > MAX_BREADCRUMBS:
            self.breadcrumbs.pop(0)

    def get_state_dict(self):
        """
        Get complete tank state as dictionary (for logging/headless output).

        Returns:
            Dictionary with all tank state
        """
        waypoint = self.waypoint
        return {
            'name': self.name,
            'position': {'lat': self.lat, 'lon': self.lon},
            'heading': self.heading,
            'waypoint': None if waypoint is None else {
                'lat': waypoint.lat,
                'lon': waypoint.lon,
                'name': waypoint.name,
            },
            'stats': {
                'distance_m': self.distance_m,
                'ticks': self.ticks,
                'arrivals': self.arrivals,
            }
        }

    def __repr__(self):
        return (f"Tank(pos=({self.lat:.6f}, {self.lon:.6f}), "
                f"heading={self.heading:.1f}°)")
