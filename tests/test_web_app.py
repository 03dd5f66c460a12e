"""Mini README: Tests for the FastAPI web service.

Each test builds the application around an in-memory store and a stub
geocoder, so requests exercise the real routes without touching disk or the
network.
"""

from __future__ import annotations

from typing import List

import pytest
from fastapi.testclient import TestClient

from orientatrainer.beacons import BeaconStore
from orientatrainer.configuration import OrientaTrainerSettings
from orientatrainer.geocoding import GeocoderClient, PlaceCandidate
from orientatrainer.interface import create_application
from orientatrainer.utils.geodesy import Coordinate


class StubGeocoder(GeocoderClient):
    def __init__(self, candidates: List[PlaceCandidate]) -> None:
        self.candidates = candidates
        self.queries: List[str] = []

    async def search(self, query: str) -> List[PlaceCandidate]:
        self.queries.append(query)
        return self.candidates


@pytest.fixture
def settings(tmp_path) -> OrientaTrainerSettings:
    return OrientaTrainerSettings(data_directory=tmp_path)


def _client(store: BeaconStore, settings: OrientaTrainerSettings, geocoder=None, rng=None) -> TestClient:
    return TestClient(create_application(store=store, geocoder=geocoder or StubGeocoder([]), settings=settings, rng=rng))


def test_beacon_crud_round_trip(empty_store: BeaconStore, settings: OrientaTrainerSettings) -> None:
    client = _client(empty_store, settings)

    created = client.post("/beacons", data={"lat": "40.42", "lng": "-3.70"})
    assert created.status_code == 201
    beacon_id = created.json()["id"]

    listing = client.get("/beacons").json()
    assert listing["count"] == 1
    assert listing["markers"][0] == {"id": beacon_id, "position": {"lat": 40.42, "lng": -3.70}, "title": "Beacon 1"}
    assert listing["framing"]["zoom"] == 16

    assert client.delete(f"/beacons/{beacon_id}").json() == {"removed": beacon_id, "count": 0}
    assert client.delete("/beacons/unknown").status_code == 200


def test_get_single_beacon_and_missing_beacon(seeded_store: BeaconStore, settings: OrientaTrainerSettings) -> None:
    client = _client(seeded_store, settings)

    found = client.get("/beacons/1003")
    assert found.status_code == 200
    assert found.json()["name"] == "Beacon 3"

    assert client.get("/beacons/missing").status_code == 404


def test_add_beacon_rejects_out_of_range_latitude(empty_store: BeaconStore, settings: OrientaTrainerSettings) -> None:
    response = _client(empty_store, settings).post("/beacons", data={"lat": "100", "lng": "0"})
    assert response.status_code == 422
    assert empty_store.list() == []


def test_map_click_modes(empty_store: BeaconStore, settings: OrientaTrainerSettings) -> None:
    client = _client(empty_store, settings)

    recorded = client.post("/map-click", data={"lat": "1.0", "lng": "2.0", "mode": "record_beacon"}).json()
    assert recorded["beacon"]["name"] == "Beacon 1"

    origin = client.post("/map-click", data={"lat": "3.0", "lng": "4.0", "mode": "SET_ORIGIN"}).json()
    assert origin["beacon"] is None
    assert origin["origin"] == {"lat": 3.0, "lng": 4.0}
    assert client.get("/beacons").json()["start_marker"]["position"] == {"lat": 3.0, "lng": 4.0}

    assert client.post("/map-click", data={"lat": "1", "lng": "2", "mode": "teleport"}).status_code == 422
    assert client.post("/map-click", data={"lat": "95", "lng": "2", "mode": "set_origin"}).status_code == 422


def test_generate_training_from_coordinates(
    seeded_store: BeaconStore, settings: OrientaTrainerSettings, origin: Coordinate, first_choice
) -> None:
    client = _client(seeded_store, settings, rng=first_choice)

    response = client.post(
        "/training",
        data={"lat": str(origin.lat), "lng": str(origin.lng), "max_hop_distance": "500", "desired_count": "3"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert [beacon["id"] for beacon in payload["route"]] == ["1001", "1002", "1003"]
    assert payload["partial"] is False
    assert client.get("/training").json() == payload


def test_generate_training_from_place_name(
    seeded_store: BeaconStore, settings: OrientaTrainerSettings, origin: Coordinate
) -> None:
    geocoder = StubGeocoder([PlaceCandidate(origin, "Madrid, Spain")])
    client = _client(seeded_store, settings, geocoder=geocoder)

    payload = client.post(
        "/training", data={"location": "Madrid", "max_hop_distance": "500", "desired_count": "3", "seed": "7"}
    ).json()

    assert geocoder.queries == ["Madrid"]
    assert payload["location"] == "Madrid, Spain"
    assert payload["origin"] == origin.as_dict()


def test_unknown_place_falls_back_to_default_origin(
    seeded_store: BeaconStore, settings: OrientaTrainerSettings
) -> None:
    client = _client(seeded_store, settings, geocoder=StubGeocoder([]))

    payload = client.post(
        "/training", data={"location": "Nowhere", "max_hop_distance": "500", "desired_count": "2", "seed": "1"}
    ).json()

    assert payload["origin"] == {"lat": settings.default_center_lat, "lng": settings.default_center_lng}
    assert "Nowhere" in payload["notices"][0]


def test_generation_errors_are_classified(seeded_store: BeaconStore, settings: OrientaTrainerSettings) -> None:
    client = _client(seeded_store, settings)

    missing_origin = client.post("/training", data={"max_hop_distance": "500", "desired_count": "3"})
    assert missing_origin.status_code == 422

    bad_count = client.post(
        "/training", data={"lat": "40.4168", "lng": "-3.7038", "max_hop_distance": "500", "desired_count": "0"}
    )
    assert bad_count.status_code == 422

    far_away = client.post(
        "/training", data={"lat": "0", "lng": "0", "max_hop_distance": "500", "desired_count": "3"}
    )
    assert far_away.status_code == 409

    assert client.get("/training").status_code == 404


def test_print_sheet_renders_route(
    seeded_store: BeaconStore, settings: OrientaTrainerSettings, origin: Coordinate, first_choice
) -> None:
    client = _client(seeded_store, settings, rng=first_choice)
    assert client.get("/training/print").status_code == 404

    client.post(
        "/training",
        data={"lat": str(origin.lat), "lng": str(origin.lng), "max_hop_distance": "500", "desired_count": "3"},
    )
    page = client.get("/training/print")

    assert page.status_code == 200
    assert "Beacons: 3 of 3" in page.text
    assert "Beacon 3" in page.text

    assert client.post("/training/clear").status_code == 200
    assert client.get("/training").status_code == 404
