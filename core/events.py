"""
Pick Events
Map clicks as explicit event objects, applied to the tank by a single dispatcher.
"""

from dataclasses import dataclass
from enum import Enum


class ClickKind(Enum):
    SINGLE = 'single'  # one primary press
    DOUBLE = 'double'  # two primary presses within DOUBLE_CLICK_MS
    SECONDARY = 'secondary'  # right button


@dataclass(frozen=True)
class PickEvent:
    """
    A click on the map, already converted to geographic coordinates.

    Attributes:
        kind: ClickKind of the click
        lat: Latitude under the pointer
        lon: Longitude under the pointer
    """
    kind: ClickKind
    lat: float
    lon: float


def dispatch(event, tank):
    """
    Apply a pick event to the tank.

    Double click sets the waypoint, right click cancels it, single clicks
    are ignored.

    Args:
        event: PickEvent
        tank: Tank instance

    Returns:
        Short description of what happened (for the status line)
    """
    if event.kind is ClickKind.DOUBLE:
        if tank.set_waypoint(event.lat, event.lon):
            return f"Waypoint ({event.lat:.5f}, {event.lon:.5f})"
        return "Waypoint discarded"

    if event.kind is ClickKind.SECONDARY:
        if tank.clear_waypoint():
            return "Waypoint cancelled"
        return "No waypoint"

    return ""
