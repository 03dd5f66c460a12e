"""Mini README: Great-circle geodesy helpers.

Structure:
    * EARTH_RADIUS_M - mean Earth radius used by every distance calculation.
    * Coordinate - immutable latitude/longitude pair in WGS84 degrees.
    * haversine_distance - spherical distance in metres between two points.

Route thresholds (catchment radius, maximum hop) are compared against the
haversine distance, so the same spherical model must be used throughout the
package rather than a more precise ellipsoidal one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Protocol

from ..errors import ValidationError

EARTH_RADIUS_M = 6_371_000.0


class HasPosition(Protocol):
    """Anything exposing ``lat`` and ``lng`` attributes in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    @classmethod
    def validated(cls, lat: Any, lng: Any) -> "Coordinate":
        """Build a coordinate, rejecting non-numeric or out of range values."""

        try:
            lat_value = float(lat)
            lng_value = float(lng)
        except (TypeError, ValueError) as error:
            raise ValidationError(f"Coordinates must be numeric, got ({lat!r}, {lng!r})") from error
        if math.isnan(lat_value) or not -90.0 <= lat_value <= 90.0:
            raise ValidationError(f"Latitude {lat!r} is outside [-90, 90]")
        if math.isnan(lng_value) or not -180.0 <= lng_value <= 180.0:
            raise ValidationError(f"Longitude {lng!r} is outside [-180, 180]")
        return cls(lat=lat_value, lng=lng_value)

    def as_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


def haversine_distance(a: HasPosition, b: HasPosition) -> float:
    """Return the great-circle distance in metres between ``a`` and ``b``."""

    lat_a = math.radians(a.lat)
    lat_b = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat_a) * math.cos(lat_b) * math.sin(delta_lng / 2) ** 2
    )
    # Rounding can push h a hair past 1 for antipodal points.
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))
