"""Mini README: Route planning subsystem for orienteering practice.

``catchment`` narrows beacons to a radius around the origin, ``builder``
chains them with a randomised greedy walk, ``framing`` picks the map view
and ``planner`` ties the steps together behind ``RoutePlanner``.
"""

from .builder import build_route, hop_distances
from .catchment import filter_near
from .framing import DEFAULT_CENTER, DEFAULT_ZOOM, ZOOM_STEPS, MapFraming, compute_framing
from .planner import DEFAULT_CATCHMENT_RADIUS_M, RoutePlanner, RouteRequest, TrainingPlan

__all__ = [
    "DEFAULT_CATCHMENT_RADIUS_M",
    "DEFAULT_CENTER",
    "DEFAULT_ZOOM",
    "MapFraming",
    "RoutePlanner",
    "RouteRequest",
    "TrainingPlan",
    "ZOOM_STEPS",
    "build_route",
    "compute_framing",
    "filter_near",
    "hop_distances",
]
