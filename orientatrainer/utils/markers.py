"""Mini README: Payload helpers for the browser map surface.

Structure:
    * MapClickMode - how a click on the map should be interpreted.
    * beacon_markers - marker dictionaries for a sequence of beacons.
    * start_marker - optional marker highlighting the route origin.
    * parse_click - validate a click payload into a ``Coordinate``.

The map widget itself lives in the browser. It receives markers shaped as
``{"id", "position": {"lat", "lng"}, "title"}`` and posts back the coordinate
the user clicked, which the caller then treats as either a new beacon or the
origin of the next route.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .geodesy import Coordinate

START_MARKER_ID = "start"


class MapClickMode(str, Enum):
    """Interpretations available for a map click."""

    RECORD_BEACON = "record_beacon"
    SET_ORIGIN = "set_origin"

    @classmethod
    def from_str(cls, value: str) -> "MapClickMode":
        """Coerce arbitrary casing into a supported click mode."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported map click mode: {value}") from error


def beacon_markers(beacons: Sequence[Any], *, numbered: bool = False) -> List[Dict[str, Any]]:
    """Convert beacons into map markers.

    When ``numbered`` is set the title reflects the position within a route
    (``"Beacon 1"``, ``"Beacon 2"`` ...) instead of the stored name.
    """

    markers: List[Dict[str, Any]] = []
    for index, beacon in enumerate(beacons, start=1):
        markers.append(
            {
                "id": beacon.id,
                "position": {"lat": beacon.lat, "lng": beacon.lng},
                "title": f"Beacon {index}" if numbered else beacon.name,
            }
        )
    return markers


def start_marker(origin: Optional[Coordinate]) -> Optional[Dict[str, Any]]:
    """Return the origin marker, or ``None`` when no origin is set."""

    if origin is None:
        return None
    return {"id": START_MARKER_ID, "position": origin.as_dict(), "title": "Start"}


def parse_click(payload: Mapping[str, Any]) -> Coordinate:
    """Validate a ``{"lat", "lng"}`` click payload."""

    return Coordinate.validated(payload.get("lat"), payload.get("lng"))
