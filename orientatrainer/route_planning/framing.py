"""Mini README: Map framing for generated routes.

Structure:
    * MapFraming - centre and integer zoom level for the map surface.
    * ZOOM_STEPS - descending (span threshold in degrees, zoom) table.
    * compute_framing - bounding box midpoint and zoom for a set of points.

The zoom is looked up from the larger of the latitude and longitude spans of
the bounding box. Larger spans must always map to lower zoom levels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from ..utils.geodesy import Coordinate, HasPosition

DEFAULT_CENTER = Coordinate(lat=40.4168, lng=-3.7038)
DEFAULT_ZOOM = 14

ZOOM_STEPS: Tuple[Tuple[float, int], ...] = (
    (0.2, 8),
    (0.1, 10),
    (0.05, 12),
    (0.02, 13),
    (0.01, 14),
    (0.005, 15),
)
BASE_ZOOM = 16


@dataclass(frozen=True, slots=True)
class MapFraming:
    """Where the map should be centred and how far it should zoom in."""

    center: Coordinate
    zoom: int

    def as_dict(self) -> Dict[str, Any]:
        return {"center": self.center.as_dict(), "zoom": self.zoom}


def zoom_for_span(
    span: float,
    steps: Sequence[Tuple[float, int]] = ZOOM_STEPS,
    base_zoom: int = BASE_ZOOM,
) -> int:
    """Return the zoom of the first step whose threshold ``span`` exceeds."""

    for threshold, zoom in steps:
        if span > threshold:
            return zoom
    return base_zoom


def compute_framing(
    points: Sequence[HasPosition],
    *,
    default_center: Coordinate = DEFAULT_CENTER,
    default_zoom: int = DEFAULT_ZOOM,
    steps: Sequence[Tuple[float, int]] = ZOOM_STEPS,
    base_zoom: int = BASE_ZOOM,
) -> MapFraming:
    """Frame ``points`` on the map; an empty input yields the defaults."""

    if not points:
        return MapFraming(center=default_center, zoom=default_zoom)

    lats = [point.lat for point in points]
    lngs = [point.lng for point in points]
    min_lat, max_lat = min(lats), max(lats)
    min_lng, max_lng = min(lngs), max(lngs)

    center = Coordinate(lat=(min_lat + max_lat) / 2, lng=(min_lng + max_lng) / 2)
    span = max(max_lat - min_lat, max_lng - min_lng)
    return MapFraming(center=center, zoom=zoom_for_span(span, steps, base_zoom))
