"""
Geocoding utilities for MuseumNight.

This module provides a thin wrapper around the `geopy` library to
recover coordinates for catalogue entries that only carry an address.
It uses OpenStreetMap's Nominatim service via geopy's API. A small
cache is maintained in memory to avoid repeated queries for the same
address.

Example usage:

    from museumnight.geocode import geocode_address
    coords = geocode_address("Museumstraat 1, Amsterdam")

The geocode function returns ``None`` if the address cannot be
geocoded.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import lru_cache
from typing import List, Optional, Sequence

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from museumnight.models import Coordinate, Stop

logger = logging.getLogger(__name__)

# Nominatim allows one request per second.
MIN_DELAY_SECONDS = 1.0

_geocode: Optional[RateLimiter] = None


def _get_geocode() -> RateLimiter:
    """Return the singleton, rate limited Nominatim ``geocode`` callable."""
    global _geocode
    if _geocode is None:
        # Nominatim's usage policy requires an identifying user agent.
        geocoder = Nominatim(user_agent="museumnight_app")
        _geocode = RateLimiter(
            geocoder.geocode,
            min_delay_seconds=MIN_DELAY_SECONDS,
            max_retries=0,
            swallow_exceptions=False,
        )
    return _geocode


@lru_cache(maxsize=128)
def geocode_address(address: str) -> Optional[Coordinate]:
    """Geocode an address and return its ``Coordinate`` or ``None``.

    Requests are spaced at least ``MIN_DELAY_SECONDS`` apart. A timeout
    is retried once with a longer limit. Service errors are
    logged and reported as ``None``.
    """
    geocode = _get_geocode()
    try:
        location = geocode(address, timeout=10)
    except GeocoderTimedOut:
        try:
            location = geocode(address, timeout=20)
        except (GeocoderTimedOut, GeocoderServiceError) as exc:
            logger.warning("Geocoding %r failed after retry: %s", address, exc)
            return None
    except GeocoderServiceError as exc:
        logger.warning("Geocoding %r failed: %s", address, exc)
        return None
    if location is None:
        return None
    return Coordinate(location.latitude, location.longitude)


def fill_missing_coordinates(stops: Sequence[Stop]) -> List[Stop]:
    """Return the stops with coordinates geocoded from their address where missing."""
    filled: List[Stop] = []
    for stop in stops:
        if stop.routable or not stop.address:
            filled.append(stop)
            continue
        coords = geocode_address(stop.address)
        if coords is None:
            filled.append(stop)
            continue
        logger.info("Geocoded %s to %s,%s", stop.name, coords.lat, coords.lng)
        filled.append(replace(stop, coords=coords))
    return filled
