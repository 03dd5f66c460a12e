"""Mini README: Randomised greedy route construction.

Structure:
    * RandomSource - protocol for the injectable random number source.
    * build_route - chain candidates into a route under a max-hop constraint.

The walk starts at a random candidate and repeatedly hops to a random unused
candidate within ``max_hop_distance`` of the current end of the route. There
is no lookahead or backtracking, so the result is one valid route rather than
an optimal one, and it may stop short of ``desired_count`` when the current
end has no reachable neighbours left.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence, TypeVar

from ..logging_utils import get_logger
from ..utils.geodesy import HasPosition, haversine_distance

LOGGER = get_logger(__name__)

PointT = TypeVar("PointT", bound=HasPosition)


class RandomSource(Protocol):
    """Subset of ``random.Random`` used for uniform selection."""

    def choice(self, seq: Sequence[PointT]) -> PointT:
        ...


def build_route(
    candidates: Sequence[PointT],
    max_hop_distance: float,
    desired_count: int,
    rng: RandomSource,
) -> List[PointT]:
    """Chain up to ``desired_count`` candidates with hops of at most ``max_hop_distance`` metres."""

    if not candidates:
        LOGGER.info("No candidates available for route building")
        return []

    pool = list(candidates)
    first = rng.choice(pool)
    pool.remove(first)
    route: List[PointT] = [first]

    while len(route) < desired_count and pool:
        last = route[-1]
        reachable = [point for point in pool if haversine_distance(last, point) <= max_hop_distance]
        if not reachable:
            LOGGER.debug("Route stopped after %s beacons: no neighbour within %.0f m", len(route), max_hop_distance)
            break
        following = rng.choice(reachable)
        pool.remove(following)
        route.append(following)

    LOGGER.debug("Built route of %s/%s beacons from %s candidates", len(route), desired_count, len(candidates))
    return route


def hop_distances(route: Sequence[HasPosition]) -> List[float]:
    """Distances in metres between consecutive route points."""

    return [haversine_distance(a, b) for a, b in zip(route, route[1:])]
