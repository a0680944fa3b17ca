"""
Map visualisation utilities for MuseumNight.

This module provides a helper function to build an interactive map
using the Folium library. Every museum in the catalogue gets a marker,
selected museums are highlighted, the start is marked in gold, and a
planned tour is drawn as a polyline with numbered stops. The map can be
embedded directly in a Streamlit app via ``streamlit_folium``.
"""

from __future__ import annotations

from typing import Optional, Sequence

import folium

from museumnight.models import Stop, Tour

AMSTERDAM_CENTRE = (52.373055, 4.892222)


def _number_icon(order: int) -> folium.DivIcon:
    return folium.DivIcon(
        html=(
            "<div style='font-size: 12px; color: white; background-color: #dc3545; "
            "border-radius: 50%; width: 24px; height: 24px; text-align: center; "
            f"line-height: 24px;'>{order}</div>"
        )
    )


def create_folium_map(
    museums: Sequence[Stop],
    start: Stop,
    selected: Sequence[Stop] = (),
    tour: Optional[Tour] = None,
) -> folium.Map:
    """Create a Folium map of the catalogue, the selection and the planned tour.

    Args:
        museums: All museums that can be chosen. Museums without
            coordinates are not drawn.
        start: The tour start, drawn with a gold marker.
        selected: Museums currently selected by the user.
        tour: The optimised tour. When given its stops are numbered in
            visiting order and connected by a polyline.

    Returns:
        A Folium Map object ready for display.
    """
    centre = start.coords.as_tuple() if start.coords is not None else AMSTERDAM_CENTRE
    m = folium.Map(location=list(centre), zoom_start=13, tiles="OpenStreetMap")
    selected_ids = {stop.id for stop in selected}
    tour_ids = {stop.id for stop in tour} if tour is not None else set()

    if start.coords is not None:
        folium.Marker(
            location=list(start.coords.as_tuple()),
            popup=folium.Popup(f"Start: {start.name}", parse_html=True),
            icon=folium.Icon(color="orange", icon="star"),
        ).add_to(m)

    for museum in museums:
        if not museum.routable or museum.id == start.id or museum.id in tour_ids:
            continue
        colour = "red" if museum.id in selected_ids else "blue"
        folium.Marker(
            location=list(museum.coords.as_tuple()),
            popup=folium.Popup(museum.name, parse_html=True),
            icon=folium.Icon(color=colour),
        ).add_to(m)

    if tour is not None and len(tour) > 1:
        for order, stop in enumerate(tour.visits, start=1):
            if stop.coords is None:
                continue
            folium.Marker(
                location=list(stop.coords.as_tuple()),
                popup=folium.Popup(f"{order}. {stop.name}", parse_html=True),
                icon=_number_icon(order),
            ).add_to(m)
        poly_coords = [list(coords.as_tuple()) for coords in tour.coordinates()]
        folium.PolyLine(poly_coords, color="blue", weight=4, opacity=0.6).add_to(m)
    return m
