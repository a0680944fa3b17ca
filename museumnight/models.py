"""
Value types shared by the MuseumNight modules.

All types are frozen dataclasses: a planning request builds them from
the museum catalogue and the user's selection, and every step returns
new values instead of mutating its input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.lat, self.lng

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)


@dataclass(frozen=True)
class Stop:
    """A point of interest that can be visited on a tour.

    ``coords`` is ``None`` when the catalogue has no usable location for
    the stop. Such stops must be filtered out before optimisation.
    """

    id: int
    name: str
    coords: Optional[Coordinate] = None
    address: str = ""
    uri: str = ""
    about: str = field(default="", compare=False)

    @property
    def routable(self) -> bool:
        return self.coords is not None and self.coords.is_finite


class Tour:
    """An ordered sequence of stops beginning at the tour start."""

    __slots__ = ("_stops",)

    def __init__(self, stops: Iterable[Stop]):
        stops = tuple(stops)
        if not stops:
            raise ValueError("a tour needs at least the start stop")
        seen = set()
        for stop in stops:
            if stop.id in seen:
                raise ValueError(f"stop {stop.id} appears more than once in the tour")
            seen.add(stop.id)
        self._stops = stops

    @property
    def start(self) -> Stop:
        return self._stops[0]

    @property
    def stops(self) -> Tuple[Stop, ...]:
        return self._stops

    @property
    def visits(self) -> Tuple[Stop, ...]:
        """Stops visited after leaving the start."""
        return self._stops[1:]

    def coordinates(self) -> List[Coordinate]:
        return [stop.coords for stop in self._stops if stop.coords is not None]

    def __len__(self) -> int:
        return len(self._stops)

    def __iter__(self) -> Iterator[Stop]:
        return iter(self._stops)

    def __getitem__(self, index):
        return self._stops[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tour):
            return NotImplemented
        return self._stops == other._stops

    def __hash__(self) -> int:
        return hash(self._stops)

    def __repr__(self) -> str:
        names = " -> ".join(stop.name for stop in self._stops)
        return f"Tour({names})"
