"""
Streamlit application for the Amsterdam museum night route planner.

This script defines the user interface: it loads the museum catalogue,
lets the user pick museums, computes the shortest walking tour from
Dam Square, and shows the time estimate, an interactive map and a
Google Maps link for the tour.

To run this app locally for development, install the package and
execute:

    streamlit run museumnight/app.py

Settings are read from Streamlit's secrets (``.streamlit/secrets.toml``)
when present; see ``museumnight.config`` for the available keys.
"""

from __future__ import annotations

import logging
from typing import List, MutableMapping, Optional, Sequence

import streamlit as st
from streamlit_folium import folium_static

from museumnight.catalogue import load_catalogue, rank_by_distance, split_routable
from museumnight.config import TourSettings, load_settings
from museumnight.exceptions import CatalogueError, MuseumNightError
from museumnight.geocode import fill_missing_coordinates
from museumnight.models import Stop
from museumnight.planner import TourPlan, format_plan_text, plan_tour
from museumnight.routing import walking_minutes
from museumnight.schedule import format_duration
from museumnight.visualisation import create_folium_map

logger = logging.getLogger(__name__)

SELECTION_KEY = "selection"
PLAN_KEY = "plan"


def get_settings() -> TourSettings:
    try:
        secrets = dict(st.secrets)
    except FileNotFoundError:
        secrets = {}
    return load_settings(secrets)


@st.cache_data(show_spinner=False)
def get_museums(source: str, timeout: float, geocode_missing: bool) -> List[Stop]:
    museums = load_catalogue(source, timeout=timeout)
    if geocode_missing:
        museums = fill_missing_coordinates(museums)
    return museums


def museum_label(stop: Stop, distance_km: float, settings: TourSettings) -> str:
    minutes = walking_minutes(
        distance_km,
        speed_kmh=settings.walking_speed_kmh,
        allowance_minutes=settings.leg_allowance_minutes,
    )
    return f"{stop.name} ({distance_km:.2f} km • 🚶 {format_duration(minutes)})"


def clear_selection(state: MutableMapping) -> None:
    """Reset the chosen museums and forget the planned tour."""
    state[SELECTION_KEY] = []
    state.pop(PLAN_KEY, None)


def current_plan(state: MutableMapping, selection: Sequence[Stop]) -> Optional[TourPlan]:
    """Return the stored plan if it was made for ``selection``, dropping it otherwise."""
    plan = state.get(PLAN_KEY)
    if plan is None:
        return None
    planned = {stop.id for stop in plan.tour.visits} | {stop.id for stop in plan.skipped}
    if planned != {stop.id for stop in selection}:
        state.pop(PLAN_KEY, None)
        return None
    return plan


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    st.set_page_config(page_title="Amsterdam Museum Route Planner", layout="wide")
    st.title("Amsterdam Museum Route Planner")
    window = f"{settings.window_start:%H:%M} to {settings.window_end:%H:%M}"
    st.caption(f"Plan your efficient night at the museums from {window}")

    with st.spinner("Loading museums…"):
        try:
            museums = get_museums(
                settings.museums_source, settings.request_timeout, settings.geocode_missing
            )
        except CatalogueError as exc:
            logger.error("Error reading museums data: %s", exc)
            st.error("Failed to load museums data.")
            st.stop()

    routable, excluded = split_routable(museums)
    if excluded:
        st.warning(
            f"Note: {len(excluded)} museum(s) were excluded due to missing location data."
        )

    ranked = rank_by_distance(settings.start, [m for m in routable if m.id != settings.start.id])
    labels = {stop.id: museum_label(stop, km, settings) for stop, km in ranked}
    by_id = {stop.id: stop for stop, _ in ranked}

    col_controls, col_map = st.columns([1, 3])
    with col_controls:
        chosen_ids = st.multiselect(
            "Add a museum",
            options=list(labels),
            format_func=lambda stop_id: labels[stop_id],
            max_selections=settings.max_stops,
            key=SELECTION_KEY,
        )
        selection = [by_id[stop_id] for stop_id in chosen_ids]
        start_tour = st.button(
            "Start Walking Tour",
            disabled=not selection,
            use_container_width=True,
        )
        st.button(
            "Clear Selection",
            on_click=clear_selection,
            args=(st.session_state,),
            use_container_width=True,
        )

        if start_tour:
            with st.spinner("Calculating Optimal Route..."):
                try:
                    st.session_state[PLAN_KEY] = plan_tour(selection, settings)
                except MuseumNightError as exc:
                    st.error(exc.message)

        plan = current_plan(st.session_state, selection)
        if plan is not None:
            st.subheader("Time Estimate (Optimal Route)")
            if plan.schedule.feasible:
                st.success(plan.schedule.text)
            else:
                st.warning(plan.schedule.text)
            st.text_area("Itinerary", format_plan_text(plan, settings), height=220)
            if plan.link:
                st.link_button("Open in Google Maps", plan.link, use_container_width=True)

    with col_map:
        fol_map = create_folium_map(
            routable,
            settings.start,
            selected=selection,
            tour=plan.tour if plan is not None else None,
        )
        folium_static(fol_map, width=900, height=650)


if __name__ == "__main__":
    main()
