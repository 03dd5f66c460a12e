"""Mini README: Explicit application state for the trainer workflow.

Structure:
    * TrainerState - immutable snapshot of the current origin, last plan and
      notices shown to the user.
    * apply_map_click - interpret a map click as a new beacon or a new origin.
    * generate_plan - run the planner and return the next state.

Operations take the current state and return a new one. When an operation
fails the exception propagates and the caller keeps its previous state, so a
failed generation never discards the last good route.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .beacons import Beacon, BeaconStore
from .logging_utils import get_logger
from .route_planning import RoutePlanner, TrainingPlan
from .route_planning.builder import RandomSource
from .utils.geodesy import Coordinate
from .utils.markers import MapClickMode

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TrainerState:
    """What the user is currently looking at."""

    origin: Optional[Coordinate] = None
    location_label: Optional[str] = None
    plan: Optional[TrainingPlan] = None
    notices: Tuple[str, ...] = field(default_factory=tuple)

    def with_origin(self, origin: Coordinate, label: Optional[str] = None) -> "TrainerState":
        return replace(self, origin=origin, location_label=label)

    def with_plan(self, plan: TrainingPlan) -> "TrainerState":
        return replace(self, plan=plan, notices=tuple(plan.notices))

    def with_notices(self, *notices: str) -> "TrainerState":
        return replace(self, notices=tuple(notices))

    def cleared(self) -> "TrainerState":
        """Drop the generated plan, keeping the chosen origin."""

        return replace(self, plan=None, notices=("Training cleared",))


def apply_map_click(
    state: TrainerState,
    store: BeaconStore,
    position: Coordinate,
    mode: MapClickMode,
) -> Tuple[TrainerState, Optional[Beacon]]:
    """Record a beacon or move the origin depending on ``mode``."""

    if mode is MapClickMode.RECORD_BEACON:
        beacon = store.add(position)
        return state.with_notices(f"{beacon.name} added"), beacon
    LOGGER.debug("Origin moved to (%.5f, %.5f)", position.lat, position.lng)
    return state.with_origin(position).with_notices("Route origin updated"), None


def generate_plan(
    state: TrainerState,
    planner: RoutePlanner,
    *,
    max_hop_distance: float,
    desired_count: int,
    origin: Optional[Coordinate] = None,
    location_label: Optional[str] = None,
    extra_notices: Tuple[str, ...] = (),
    rng: Optional[RandomSource] = None,
) -> TrainerState:
    """Generate a plan from ``origin`` (or the state's origin) and return the new state."""

    effective_origin = origin or state.origin
    label = location_label if origin is not None else state.location_label
    request = planner.request(effective_origin, max_hop_distance, desired_count)
    plan = planner.plan(request, rng=rng, location_label=label)
    plan.notices[:0] = list(extra_notices)
    return replace(state.with_plan(plan), origin=effective_origin, location_label=label)
