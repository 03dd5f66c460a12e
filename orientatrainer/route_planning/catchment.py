"""Mini README: Catchment filtering around a route origin.

Only beacons within the catchment radius of the origin are eligible for a
route. The boundary is inclusive and the input order is preserved.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from ..logging_utils import get_logger
from ..utils.geodesy import Coordinate, HasPosition, haversine_distance

LOGGER = get_logger(__name__)

PointT = TypeVar("PointT", bound=HasPosition)


def filter_near(beacons: Sequence[PointT], origin: Coordinate, radius: float) -> List[PointT]:
    """Return the beacons whose distance to ``origin`` is at most ``radius`` metres."""

    nearby = [beacon for beacon in beacons if haversine_distance(origin, beacon) <= radius]
    LOGGER.debug(
        "Catchment of %.0f m around (%.5f, %.5f) kept %s of %s beacons",
        radius,
        origin.lat,
        origin.lng,
        len(nearby),
        len(beacons),
    )
    return nearby
