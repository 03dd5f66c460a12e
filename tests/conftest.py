"""Mini README: Shared fixtures for the OrientaTrainer test-suite.

Structure:
    * FirstChoice - deterministic stand-in for ``random.Random``.
    * origin - route origin in central Madrid.
    * seeded_store - store preloaded with five beacons 100-1000 m from the origin.
    * empty_store - store over an empty in-memory backend.
"""

from __future__ import annotations

import json
from typing import Sequence, TypeVar

import pytest

from orientatrainer.beacons import BeaconStore, InMemoryBackend
from orientatrainer.utils.geodesy import Coordinate

T = TypeVar("T")

ORIGIN = Coordinate(lat=40.4168, lng=-3.7038)

SEED_RECORDS = [
    {"id": "1001", "name": "Beacon 1", "lat": 40.4178, "lng": -3.7038, "dateAdded": "2024-05-01"},
    {"id": "1002", "name": "Beacon 2", "lat": 40.4208, "lng": -3.7038, "dateAdded": "2024-05-01"},
    {"id": "1003", "name": "Beacon 3", "lat": 40.4208, "lng": -3.6998, "dateAdded": "2024-05-02"},
    {"id": "1004", "name": "Beacon 4", "lat": 40.4248, "lng": -3.6998, "dateAdded": "2024-05-02"},
    {"id": "1005", "name": "Beacon 5", "lat": 40.4168, "lng": -3.6948, "dateAdded": "2024-05-03"},
]


class FirstChoice:
    """Always picks the first element so routes are fully predictable."""

    def choice(self, seq: Sequence[T]) -> T:
        return seq[0]


@pytest.fixture
def origin() -> Coordinate:
    return ORIGIN


@pytest.fixture
def first_choice() -> FirstChoice:
    return FirstChoice()


@pytest.fixture
def seeded_store() -> BeaconStore:
    backend = InMemoryBackend({"orientatrainer-beacons": json.dumps(SEED_RECORDS)})
    return BeaconStore(backend)


@pytest.fixture
def empty_store() -> BeaconStore:
    return BeaconStore(InMemoryBackend())
