"""Mini README: Utility helpers for OrientaTrainer.

Exports the geodesy primitives used by every route calculation and the map
marker helpers consumed by the web interface.
"""

from .geodesy import EARTH_RADIUS_M, Coordinate, haversine_distance
from .markers import MapClickMode, beacon_markers, parse_click, start_marker

__all__ = [
    "EARTH_RADIUS_M",
    "Coordinate",
    "MapClickMode",
    "beacon_markers",
    "haversine_distance",
    "parse_click",
    "start_marker",
]
