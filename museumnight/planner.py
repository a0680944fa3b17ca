"""
Tour planning for MuseumNight.

``plan_tour`` is what the user interface calls when the walking tour is
started: it checks the selection, finds the shortest order and derives
the schedule summary and the Google Maps link from that order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from museumnight.config import TourSettings
from museumnight.exceptions import TooManyStopsError
from museumnight.links import directions_link
from museumnight.models import Stop, Tour
from museumnight.optimisation import CancelSignal, optimal_order
from museumnight.routing import (
    haversine_distance,
    total_tour_minutes,
    tour_distance,
    walking_minutes,
)
from museumnight.schedule import ScheduleSummary, format_duration, report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TourPlan:
    tour: Tour
    distance_km: float
    total_minutes: int
    schedule: ScheduleSummary
    link: Optional[str]
    skipped: tuple = ()


def prepare_selection(start: Stop, selection: Sequence[Stop]) -> tuple:
    """Drop the start, repeated stops and stops without a location.

    Returns a ``(stops, skipped)`` pair where ``skipped`` holds the
    stops that were dropped for lacking coordinates.
    """
    stops: List[Stop] = []
    skipped: List[Stop] = []
    seen = {start.id}
    for stop in selection:
        if stop.id in seen:
            continue
        seen.add(stop.id)
        if not stop.routable:
            skipped.append(stop)
            continue
        stops.append(stop)
    if skipped:
        logger.warning(
            "Leaving out museums without coordinates: %s",
            ", ".join(stop.name for stop in skipped),
        )
    return stops, skipped


def plan_tour(
    selection: Sequence[Stop],
    settings: Optional[TourSettings] = None,
    cancel: Optional[CancelSignal] = None,
) -> TourPlan:
    """Plan the shortest walking tour through ``selection``.

    Raises:
        TooManyStopsError: if more museums are selected than the exact
            search is allowed to handle.
        SearchCancelled: if ``cancel`` is set while searching.
    """
    settings = settings or TourSettings()
    stops, skipped = prepare_selection(settings.start, selection)
    if len(stops) > settings.max_stops:
        raise TooManyStopsError(len(stops), settings.max_stops)
    tour = optimal_order(settings.start, stops, cancel=cancel)
    minutes = total_tour_minutes(
        tour,
        speed_kmh=settings.walking_speed_kmh,
        allowance_minutes=settings.leg_allowance_minutes,
        dwell_minutes=settings.dwell_minutes,
    )
    summary = report(
        minutes,
        settings.tour_start,
        window_start=settings.window_start,
        window_end=settings.window_end,
    )
    plan = TourPlan(
        tour=tour,
        distance_km=tour_distance(tour),
        total_minutes=minutes,
        schedule=summary,
        link=directions_link(tour, settings.maps_base_url),
        skipped=tuple(skipped),
    )
    logger.info(
        "Planned %s: %.2f km, %d min, feasible=%s",
        tour,
        plan.distance_km,
        minutes,
        summary.feasible,
    )
    return plan


def format_plan_text(plan: TourPlan, settings: Optional[TourSettings] = None) -> str:
    """Format the itinerary text shown next to the map."""
    settings = settings or TourSettings()
    lines = ["Your walking tour:\n"]
    stops = plan.tour.stops
    for i, stop in enumerate(stops):
        if i == 0:
            lines.append(f"Start: {stop.name}")
            continue
        leg = walking_minutes(
            haversine_distance(stops[i - 1].coords, stop.coords),
            speed_kmh=settings.walking_speed_kmh,
            allowance_minutes=settings.leg_allowance_minutes,
        )
        lines.append(f"{i}. {stop.name} (walk {format_duration(leg)})")
    lines.append(f"\nTotal distance: {plan.distance_km:.2f} km")
    lines.append(plan.schedule.text)
    return "\n".join(lines)
