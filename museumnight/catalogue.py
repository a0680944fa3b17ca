"""
Museum catalogue loading for MuseumNight.

The catalogue is a JSON list of museum records as published by the
museum night organisers:

    {"id": 12, "name": "Rijksmuseum", "address": "Museumstraat 1",
     "coords": {"lat": 52.36, "lng": 4.8852}, "uri": "...", "about": "..."}

It is read from a local file or fetched over HTTP. Records without a
usable location are kept as stops without coordinates so the
presentation layer can tell the user which museums were left out.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import requests

from museumnight.exceptions import CatalogueError
from museumnight.models import Coordinate, Stop
from museumnight.routing import haversine_distance

logger = logging.getLogger(__name__)


def _number(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


def parse_coordinate(raw: Any) -> Optional[Coordinate]:
    """Return the coordinate of a raw ``coords`` object or ``None``.

    Missing, zero or non‑numeric latitude/longitude values all count as
    no location.
    """
    if not isinstance(raw, Mapping):
        return None
    lat = _number(raw.get("lat"))
    lng = _number(raw.get("lng"))
    if lat is None or lng is None:
        return None
    return Coordinate(lat, lng)


def parse_stop(record: Mapping[str, Any]) -> Stop:
    try:
        stop_id = int(record["id"])
        name = str(record["name"])
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogueError(f"invalid museum record: {record!r}") from exc
    return Stop(
        id=stop_id,
        name=name,
        coords=parse_coordinate(record.get("coords")),
        address=str(record.get("address") or ""),
        uri=str(record.get("uri") or ""),
        about=str(record.get("about") or ""),
    )


def _read_source(source: str, timeout: float) -> Any:
    if source.startswith(("http://", "https://")):
        try:
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise CatalogueError(f"failed to fetch museums from {source}: {exc}") from exc
    try:
        with Path(source).open(encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        raise CatalogueError(f"failed to read museums from {source}: {exc}") from exc


def load_catalogue(source: str, timeout: float = 30.0) -> List[Stop]:
    """Load all museums from a JSON file path or an http(s) URL.

    Raises:
        CatalogueError: if the data cannot be read or is not a list of
            museum records.
    """
    data = _read_source(source, timeout)
    if not isinstance(data, list):
        raise CatalogueError(f"expected a list of museums in {source}")
    stops = [parse_stop(record) for record in data]
    logger.info("Loaded %d museums from %s", len(stops), source)
    return stops


def split_routable(stops: Iterable[Stop]) -> Tuple[List[Stop], List[Stop]]:
    """Separate stops that can be routed from those without a location."""
    routable: List[Stop] = []
    excluded: List[Stop] = []
    for stop in stops:
        (routable if stop.routable else excluded).append(stop)
    if excluded:
        logger.warning(
            "Museums with missing coordinates: %s",
            ", ".join(stop.name for stop in excluded),
        )
    return routable, excluded


def rank_by_distance(start: Stop, stops: Sequence[Stop]) -> List[Tuple[Stop, float]]:
    """Pair each routable stop with its distance from ``start``, nearest first."""
    ranked = [
        (stop, haversine_distance(start.coords, stop.coords))
        for stop in stops
        if stop.routable
    ]
    ranked.sort(key=lambda item: item[1])
    return ranked
