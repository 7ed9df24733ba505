"""
Waypoint Store
Single-slot holder for the actor's pending target location.
"""

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Waypoint:
    """A target location the actor moves toward."""
    lat: float
    lon: float
    name: str = ""


class WaypointStore:
    """
    Holds at most one pending waypoint.

    Written by the pick handler, read and cleared by the stepper. Setting a
    new waypoint overwrites any pending one.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._waypoint: Optional[Waypoint] = None

    def set(self, waypoint: Waypoint) -> None:
        with self._lock:
            self._waypoint = waypoint

    def peek(self) -> Optional[Waypoint]:
        with self._lock:
            return self._waypoint

    def clear(self) -> Optional[Waypoint]:
        """Remove the pending waypoint and return it (None if idle)."""
        with self._lock:
            waypoint = self._waypoint
            self._waypoint = None
            return waypoint

    def clear_if(self, waypoint: Waypoint) -> bool:
        """
        Clear only if the pending waypoint is still the given one.

        A pick that lands between reading the waypoint and clearing it
        must survive the clear.

        Returns:
            True if the waypoint was cleared
        """
        with self._lock:
            if self._waypoint is waypoint:
                self._waypoint = None
                return True
            return False

    @property
    def is_pending(self) -> bool:
        with self._lock:
            return self._waypoint is not None
