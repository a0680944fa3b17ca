"""
Configuration for MuseumNight.

Defaults describe the Amsterdam museum night: tours leave Dam Square at
19:00 and must be over by 02:00. Any value can be overridden from a
mapping of strings, which in the Streamlit app is ``st.secrets``:

    [museumnight]
    tour_start = "19:30"
    max_stops = 7
    museums_source = "https://example.org/api/museums"
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import time
from typing import Any, Mapping, Optional

from museumnight.links import GOOGLE_MAPS_DIR_URL
from museumnight.models import Coordinate, Stop
from museumnight.routing import DWELL_MINUTES, LEG_ALLOWANCE_MINUTES, WALKING_SPEED_KMH
from museumnight.schedule import WINDOW_END, WINDOW_START, parse_time_string

DAM_SQUARE = Stop(
    id=0,
    name="Dam Square",
    coords=Coordinate(52.373055, 4.892222),
    address="Dam, 1012 NP Amsterdam",
    about="Starting point of the tour",
)

DEFAULT_MUSEUMS_SOURCE = "data/museums.json"


@dataclass(frozen=True)
class TourSettings:
    start: Stop = DAM_SQUARE
    tour_start: time = WINDOW_START
    window_start: time = WINDOW_START
    window_end: time = WINDOW_END
    walking_speed_kmh: float = WALKING_SPEED_KMH
    leg_allowance_minutes: int = LEG_ALLOWANCE_MINUTES
    dwell_minutes: int = DWELL_MINUTES
    # The exact search evaluates (max_stops)! orders.
    max_stops: int = 8
    maps_base_url: str = GOOGLE_MAPS_DIR_URL
    museums_source: str = DEFAULT_MUSEUMS_SOURCE
    geocode_missing: bool = False
    log_level: str = "INFO"
    request_timeout: float = 30.0


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if isinstance(default, time):
        return raw if isinstance(raw, time) else parse_time_string(str(raw))
    if isinstance(default, bool):
        if isinstance(raw, str):
            return raw.strip().lower() in ("1", "true", "yes", "on")
        return bool(raw)
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, str):
        return str(raw)
    raise TypeError(f"setting {name!r} cannot be configured")


def load_settings(secrets: Optional[Mapping[str, Any]] = None) -> TourSettings:
    """Build ``TourSettings`` from a mapping such as ``st.secrets``.

    Values may sit at the top level or inside a ``museumnight`` section.
    Unknown keys are ignored and missing keys keep their defaults.
    """
    settings = TourSettings()
    if not secrets:
        return settings
    section = secrets.get("museumnight", secrets)
    overrides = {}
    for f in fields(TourSettings):
        if f.name == "start":
            continue
        raw = section.get(f.name)
        if raw is None:
            continue
        overrides[f.name] = _coerce(f.name, raw, getattr(settings, f.name))
    return replace(settings, **overrides)
