"""
Exact route optimisation for MuseumNight.

The tour is an open path: it leaves the fixed start, visits every
selected stop once and ends wherever the last visit is. For the handful
of museums a single evening allows, the shortest such path is found by
trying every visiting order.

    - ``brute_force_order``: exhaustive search over a distance matrix,
      returning the best permutation of indices ``1..n-1``.
    - ``optimal_order``: the entry point used by the planner, working
      on ``Stop`` values and returning a ``Tour``.

The search runs in O(n!·n) time, so callers must bound the number of
stops (see ``TourSettings.max_stops``). Permutations are generated in
lexicographic order of input position and only a strictly shorter
candidate replaces the best one, so among equally long orders the one
generated first wins.
"""

from __future__ import annotations

import logging
import math
from itertools import permutations
from typing import List, Optional, Protocol, Sequence

from museumnight.exceptions import SearchCancelled
from museumnight.models import Stop, Tour
from museumnight.routing import compute_haversine_matrix

logger = logging.getLogger(__name__)


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


def path_length(route: Sequence[int], dist_matrix: Sequence[Sequence[float]]) -> float:
    length = 0.0
    for i in range(len(route) - 1):
        length += dist_matrix[route[i]][route[i + 1]]
    return length


def brute_force_order(
    dist_matrix: Sequence[Sequence[float]],
    cancel: Optional[CancelSignal] = None,
) -> List[int]:
    """Find the shortest open path starting at index 0.

    Args:
        dist_matrix: A square matrix of distances; index 0 is the start.
        cancel: Optional signal checked before each permutation is
            evaluated. When it is set the search stops.

    Returns:
        The visiting order as a list of indices beginning with 0.

    Raises:
        SearchCancelled: if ``cancel`` was set during the search.
    """
    n = len(dist_matrix)
    if n <= 2:
        return list(range(n))
    best: List[int] = []
    best_length = math.inf
    evaluated = 0
    for perm in permutations(range(1, n)):
        if cancel is not None and cancel.is_set():
            raise SearchCancelled(evaluated)
        route = [0, *perm]
        length = path_length(route, dist_matrix)
        evaluated += 1
        if length < best_length:
            best = route
            best_length = length
    logger.debug("Evaluated %d permutations, best length %.4f km", evaluated, best_length)
    return best


def optimal_order(
    start: Stop,
    stops: Sequence[Stop],
    cancel: Optional[CancelSignal] = None,
) -> Tour:
    """Return the shortest tour from ``start`` through every stop in ``stops``.

    All stops must carry coordinates; filtering is the caller's job.
    The input order of ``stops`` decides which of several equally short
    tours is returned.
    """
    stops = list(stops)
    if not stops:
        return Tour([start])
    if len(stops) == 1:
        return Tour([start, stops[0]])
    nodes = [start, *stops]
    dist_matrix = compute_haversine_matrix([stop.coords for stop in nodes])
    route = brute_force_order(dist_matrix, cancel=cancel)
    return Tour(nodes[i] for i in route)
