"""Mini README: Durable ordered collection of beacons.

Structure:
    * Beacon - immutable waypoint record.
    * BeaconStore - list/add/remove operations over a ``KeyValueBackend``.

Every mutation reads the current collection, applies the change and rewrites
the full list under a single key. A lock serialises that read-modify-write
cycle so concurrent web requests cannot drop each other's updates. The list
is always reloaded from the backend, so several stores pointing at the same
backend observe each other's writes.
"""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..errors import StorageError, ValidationError
from ..logging_utils import get_logger
from ..utils.geodesy import Coordinate
from .backends import KeyValueBackend

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "orientatrainer-beacons"


@dataclass(frozen=True, slots=True)
class Beacon:
    """Saved control point usable in generated routes."""

    id: str
    name: str
    lat: float
    lng: float
    date_added: date
    description: Optional[str] = None

    @property
    def position(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)

    def as_dict(self) -> Dict[str, Any]:
        """Export using the persisted record layout."""

        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "dateAdded": self.date_added.isoformat(),
        }
        if self.description is not None:
            payload["description"] = self.description
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Beacon":
        """Rebuild a beacon from its persisted layout, validating coordinates."""

        try:
            position = Coordinate.validated(payload["lat"], payload["lng"])
            return cls(
                id=str(payload["id"]),
                name=str(payload["name"]),
                lat=position.lat,
                lng=position.lng,
                date_added=_parse_date(payload["dateAdded"]),
                description=payload.get("description"),
            )
        except (KeyError, TypeError, ValueError) as error:
            raise StorageError(f"Malformed beacon record: {payload!r}") from error


def _parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


class BeaconStore:
    """Persist beacons in insertion order under a single backend key."""

    def __init__(self, backend: KeyValueBackend, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.backend = backend
        self.key = key
        self._lock = threading.Lock()
        LOGGER.debug("Initialised BeaconStore on key '%s'", key)

    def list(self) -> List[Beacon]:
        """Return every stored beacon in the order it was added."""

        raw = self.backend.get(self.key)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as error:
            raise StorageError(f"Stored beacons under '{self.key}' are not valid JSON") from error
        if not isinstance(records, list):
            raise StorageError(f"Stored beacons under '{self.key}' must be a list")
        return [Beacon.from_dict(record) for record in records]

    def get(self, beacon_id: str) -> Beacon:
        """Retrieve a beacon, raising informative error if not known."""

        for beacon in self.list():
            if beacon.id == beacon_id:
                return beacon
        raise KeyError(f"Beacon {beacon_id} not found")

    def add(self, position: Coordinate) -> Beacon:
        """Append a new beacon at ``position`` and persist the collection."""

        if not isinstance(position, Coordinate):
            raise ValidationError("A Coordinate is required to add a beacon")
        position = Coordinate.validated(position.lat, position.lng)
        with self._lock:
            beacons = self.list()
            beacon = Beacon(
                id=self._next_id(beacons),
                name=f"Beacon {len(beacons) + 1}",
                lat=position.lat,
                lng=position.lng,
                date_added=date.today(),
            )
            beacons.append(beacon)
            self._save(beacons)
        LOGGER.info("Added beacon %s at (%.6f, %.6f)", beacon.id, beacon.lat, beacon.lng)
        return beacon

    def remove(self, beacon_id: str) -> None:
        """Delete the beacon with ``beacon_id``; unknown ids are ignored."""

        with self._lock:
            beacons = self.list()
            remaining = [beacon for beacon in beacons if beacon.id != beacon_id]
            if len(remaining) == len(beacons):
                LOGGER.debug("Remove requested for unknown beacon %s", beacon_id)
            self._save(remaining)
        LOGGER.info("Removed beacon %s (%s remaining)", beacon_id, len(remaining))

    def _save(self, beacons: List[Beacon]) -> None:
        self.backend.set(self.key, json.dumps([beacon.as_dict() for beacon in beacons]))

    @staticmethod
    def _next_id(existing: List[Beacon]) -> str:
        """Millisecond timestamp, bumped past any existing numeric id."""

        candidate = time.time_ns() // 1_000_000
        numeric_ids = [int(beacon.id) for beacon in existing if beacon.id.isascii() and beacon.id.isdigit()]
        if numeric_ids:
            candidate = max(candidate, max(numeric_ids) + 1)
        taken = {beacon.id for beacon in existing}
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
