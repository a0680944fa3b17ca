"""
MuseumNight package initialization.

This package plans a single-night walking tour from Dam Square through
a chosen set of Amsterdam museums. Components include distance and
walking time estimation, exact route optimisation, schedule reporting,
directions links, catalogue loading, geocoding and map visualisation.

Modules:
    routing       – Haversine distances and walking time estimates.
    optimisation  – Exhaustive search for the shortest tour.
    schedule      – Start/end time summary within the night's window.
    links         – Google Maps directions links for a tour.
    catalogue     – Loading the museum catalogue from file or URL.
    geocode       – Filling in missing coordinates using Nominatim.
    planner       – Ties the above together for a single request.
    visualisation – Folium based map creation utilities.

The exact search grows factorially with the number of museums, so the
planner refuses selections larger than ``TourSettings.max_stops``.
"""

__all__ = [
    "routing",
    "optimisation",
    "schedule",
    "links",
    "catalogue",
    "geocode",
    "planner",
    "visualisation",
]
