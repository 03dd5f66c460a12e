"""Mini README: Training route planning for orienteering practice.

Structure:
    * RouteRequest - origin, maximum hop distance and desired beacon count.
    * TrainingPlan - generated route with framing, metadata and notices.
    * RoutePlanner - validates requests and runs catchment, build and framing.

The planner reads beacons fresh from the store for every request, keeps only
those inside the catchment radius of the origin, chains them with the
randomised greedy walk and frames the result for the map. Routes shorter
than requested are returned with a notice instead of failing.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..beacons import Beacon, BeaconStore
from ..errors import NoCandidatesError, PartialRouteWarning, ValidationError
from ..logging_utils import get_logger
from ..utils.geodesy import Coordinate
from ..utils.markers import beacon_markers, start_marker
from .builder import RandomSource, build_route, hop_distances
from .catchment import filter_near
from .framing import DEFAULT_CENTER, DEFAULT_ZOOM, MapFraming, compute_framing

LOGGER = get_logger(__name__)

DEFAULT_CATCHMENT_RADIUS_M = 5000.0


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """Parameters for a single route generation."""

    origin: Optional[Coordinate]
    max_hop_distance: float
    desired_count: int
    catchment_radius: float = DEFAULT_CATCHMENT_RADIUS_M

    def validate(self) -> Coordinate:
        """Return the checked origin, raising ``ValidationError`` on any bad parameter."""

        if self.origin is None:
            raise ValidationError("A route origin is required")
        origin = Coordinate.validated(self.origin.lat, self.origin.lng)
        if not _is_positive_number(self.max_hop_distance):
            raise ValidationError(f"Maximum hop distance must be positive, got {self.max_hop_distance!r}")
        if isinstance(self.desired_count, bool) or not isinstance(self.desired_count, int) or self.desired_count < 1:
            raise ValidationError(f"Desired beacon count must be an integer of at least 1, got {self.desired_count!r}")
        if not _is_positive_number(self.catchment_radius):
            raise ValidationError(f"Catchment radius must be positive, got {self.catchment_radius!r}")
        return origin


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


@dataclass(slots=True)
class TrainingPlan:
    """Generated route plus what the map and print views need."""

    request: RouteRequest
    route: List[Beacon]
    framing: MapFraming
    candidate_count: int
    generated_on: date = field(default_factory=date.today)
    location_label: Optional[str] = None
    notices: List[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return len(self.route) < self.request.desired_count

    def markers(self) -> List[Dict[str, Any]]:
        """Numbered route markers for the map surface."""

        return beacon_markers(self.route, numbered=True)

    def print_sheet(self) -> Dict[str, Any]:
        """Static summary consumed by the printable route view."""

        hops = hop_distances(self.route)
        return {
            "location": self.location_label or "",
            "beacon_count": len(self.route),
            "requested_count": self.request.desired_count,
            "max_hop_distance_m": self.request.max_hop_distance,
            "catchment_radius_m": self.request.catchment_radius,
            "generated_on": self.generated_on.isoformat(),
            "total_distance_m": sum(hops),
            "beacons": [
                {
                    "number": index,
                    "id": beacon.id,
                    "name": beacon.name,
                    "lat": beacon.lat,
                    "lng": beacon.lng,
                    "hop_from_previous_m": hops[index - 2] if index > 1 else None,
                }
                for index, beacon in enumerate(self.route, start=1)
            ],
        }

    def as_dict(self) -> Dict[str, Any]:
        """Serialise the plan for JSON responses."""

        origin = self.request.origin
        return {
            "origin": origin.as_dict() if origin else None,
            "max_hop_distance_m": self.request.max_hop_distance,
            "desired_count": self.request.desired_count,
            "catchment_radius_m": self.request.catchment_radius,
            "candidate_count": self.candidate_count,
            "generated_on": self.generated_on.isoformat(),
            "location": self.location_label,
            "partial": self.is_partial,
            "notices": list(self.notices),
            "route": [beacon.as_dict() for beacon in self.route],
            "framing": self.framing.as_dict(),
            "markers": self.markers(),
            "start_marker": start_marker(origin),
        }


class RoutePlanner:
    """Generate orienteering practice routes from stored beacons."""

    def __init__(
        self,
        store: BeaconStore,
        *,
        catchment_radius: float = DEFAULT_CATCHMENT_RADIUS_M,
        default_center: Coordinate = DEFAULT_CENTER,
        default_zoom: int = DEFAULT_ZOOM,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.store = store
        self.catchment_radius = catchment_radius
        self.default_center = default_center
        self.default_zoom = default_zoom
        self.rng = rng or random.SystemRandom()
        LOGGER.debug("Initialised RoutePlanner with catchment_radius=%s", catchment_radius)

    def request(
        self, origin: Optional[Coordinate], max_hop_distance: float, desired_count: int
    ) -> RouteRequest:
        """Build a request using this planner's catchment radius."""

        return RouteRequest(
            origin=origin,
            max_hop_distance=max_hop_distance,
            desired_count=desired_count,
            catchment_radius=self.catchment_radius,
        )

    def plan(
        self,
        request: RouteRequest,
        *,
        rng: Optional[RandomSource] = None,
        location_label: Optional[str] = None,
    ) -> TrainingPlan:
        """Validate ``request`` and build a training plan from stored beacons."""

        origin = request.validate()

        beacons = self.store.list()
        if not beacons:
            raise NoCandidatesError("No beacons are saved yet; add some before generating a route")

        candidates = filter_near(beacons, origin, request.catchment_radius)
        if not candidates:
            LOGGER.warning(
                "No beacons within %.0f m of (%.5f, %.5f)",
                request.catchment_radius,
                origin.lat,
                origin.lng,
            )
            raise NoCandidatesError(
                f"No beacons within {request.catchment_radius / 1000:g} km of the chosen origin"
            )

        route = build_route(candidates, request.max_hop_distance, request.desired_count, rng or self.rng)
        framing = compute_framing(route, default_center=self.default_center, default_zoom=self.default_zoom)
        plan = TrainingPlan(
            request=request,
            route=route,
            framing=framing,
            candidate_count=len(candidates),
            location_label=location_label,
        )
        if plan.is_partial:
            warning = PartialRouteWarning(
                f"Only {len(route)} of {request.desired_count} beacons could be chained "
                f"with hops of at most {request.max_hop_distance:g} m"
            )
            plan.notices.append(str(warning))
            LOGGER.warning("%s", warning)
        LOGGER.info(
            "Generated route with %s beacons from %s candidates", len(route), len(candidates)
        )
        return plan
