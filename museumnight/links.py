"""
Directions links for a planned tour.

The link opens the walking route in Google Maps with every stop as a
path segment waypoint:

    https://www.google.com/maps/dir/52.373055,4.892222/52.36,4.8852

Coordinates are rendered the way a browser prints JavaScript numbers
and percent-encoded like ``encodeURI`` does, which leaves the comma
between latitude and longitude intact.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from urllib.parse import quote

from museumnight.models import Coordinate, Tour

GOOGLE_MAPS_DIR_URL = "https://www.google.com/maps/dir/"


def format_coordinate_value(value: float) -> str:
    """Render a number like JavaScript's ``String(value)``.

    Both languages print the shortest digits that round-trip, but
    JavaScript only switches to exponent notation below 1e-6 or from
    1e21 upwards, and writes the exponent without padding.
    """
    value = float(value)
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        mantissa, exponent = repr(value).split("e")
        return f"{mantissa}e{int(exponent):+d}"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def format_waypoint(coords: Coordinate) -> str:
    waypoint = f"{format_coordinate_value(coords.lat)},{format_coordinate_value(coords.lng)}"
    return quote(waypoint, safe=",")


def directions_link(tour: Tour, base_url: str = GOOGLE_MAPS_DIR_URL) -> Optional[str]:
    """Build a directions URL visiting the tour's stops in order.

    Stops without coordinates are skipped. Returns ``None`` when the
    tour has fewer than two stops, or fewer than two that can be
    placed on the map.
    """
    if len(tour) < 2:
        return None
    waypoints = [format_waypoint(stop.coords) for stop in tour if stop.coords is not None]
    if len(waypoints) < 2:
        return None
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url + "/".join(waypoints)
