"""
Distance and walking time utilities for MuseumNight.

This module computes great‑circle distances between coordinates with
the Haversine formula and derives walking time estimates from them.
No routing service is involved: every leg is assumed to be walked in
a straight line at a constant speed, with a small fixed allowance per
leg for street crossings and traffic lights.

Example usage:

    dam = Coordinate(52.373055, 4.892222)
    rijks = Coordinate(52.3600, 4.8852)
    km = haversine_distance(dam, rijks)
    minutes = walking_minutes(km)
"""

from __future__ import annotations

import math
from typing import List, Sequence

from museumnight.models import Coordinate, Tour

EARTH_RADIUS_KM = 6371.0
WALKING_SPEED_KMH = 4.0
LEG_ALLOWANCE_MINUTES = 3
DWELL_MINUTES = 45


def haversine_distance(coord1: Coordinate, coord2: Coordinate) -> float:
    """Compute the great‑circle distance between two coordinates in kilometers."""
    phi1, phi2 = math.radians(coord1.lat), math.radians(coord2.lat)
    d_phi = math.radians(coord2.lat - coord1.lat)
    d_lambda = math.radians(coord2.lng - coord1.lng)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def path_distance(coords: Sequence[Coordinate]) -> float:
    """Total length in kilometers of an open path visiting ``coords`` in order."""
    total = 0.0
    for i in range(len(coords) - 1):
        total += haversine_distance(coords[i], coords[i + 1])
    return total


def tour_distance(tour: Tour) -> float:
    return path_distance(tour.coordinates())


def compute_haversine_matrix(coords: Sequence[Coordinate]) -> List[List[float]]:
    """Compute the pairwise Haversine distance matrix for ``coords``.

    Args:
        coords: Coordinates in the order the matrix should be indexed.

    Returns:
        A square matrix where ``matrix[i][j]`` is the distance in km
        from ``coords[i]`` to ``coords[j]``.
    """
    n = len(coords)
    dist_matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            dist_matrix[i][j] = haversine_distance(coords[i], coords[j])
    return dist_matrix


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def walking_minutes(
    distance_km: float,
    speed_kmh: float = WALKING_SPEED_KMH,
    allowance_minutes: int = LEG_ALLOWANCE_MINUTES,
) -> int:
    """Estimate the walking time of a single leg.

    The travel time is rounded to the nearest whole minute, halves
    rounding up, before the per‑leg allowance is added.

    Args:
        distance_km: Straight line distance of the leg.
        speed_kmh: Assumed constant walking speed.
        allowance_minutes: Fixed delay added to every leg.

    Returns:
        Estimated walking time in whole minutes.
    """
    return round_half_up(distance_km / speed_kmh * 60.0) + allowance_minutes


def total_tour_minutes(
    tour: Tour,
    speed_kmh: float = WALKING_SPEED_KMH,
    allowance_minutes: int = LEG_ALLOWANCE_MINUTES,
    dwell_minutes: int = DWELL_MINUTES,
) -> int:
    """Estimate the elapsed time of a whole tour in minutes.

    Every leg contributes its walking time and every stop after the
    start contributes ``dwell_minutes`` of visiting time. A tour that
    only holds the start takes no time at all.
    """
    total = 0
    stops = tour.stops
    for i in range(len(stops) - 1):
        here, there = stops[i].coords, stops[i + 1].coords
        if here is None or there is None:
            continue
        total += walking_minutes(haversine_distance(here, there), speed_kmh, allowance_minutes)
    return total + dwell_minutes * (len(stops) - 1)
