"""Mini README: Tests for the geocoder client and origin resolution.

The Nominatim client is exercised through ``httpx.MockTransport`` so no
network access is needed; slow and failing lookups use small stub clients.
"""

from __future__ import annotations

import asyncio
from typing import List

import httpx
import pytest

from orientatrainer.errors import NetworkError, ValidationError
from orientatrainer.geocoding import GeocoderClient, NominatimGeocoder, PlaceCandidate, resolve_origin
from orientatrainer.utils.geodesy import Coordinate

FALLBACK = Coordinate(40.4168, -3.7038)


class SlowGeocoder(GeocoderClient):
    async def search(self, query: str) -> List[PlaceCandidate]:
        await asyncio.sleep(5)
        return []


class BrokenGeocoder(GeocoderClient):
    async def search(self, query: str) -> List[PlaceCandidate]:
        raise NetworkError("connection refused")


def _nominatim(handler) -> NominatimGeocoder:
    return NominatimGeocoder("https://geocoder.test/search", transport=httpx.MockTransport(handler))


def test_nominatim_parses_string_coordinates() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["q"] = request.url.params["q"]
        seen["agent"] = request.headers["User-Agent"]
        return httpx.Response(200, json=[{"lat": "42.8125", "lon": "-1.6458", "display_name": "Pamplona, Navarra"}])

    candidates = asyncio.run(_nominatim(handler).search("Pamplona"))

    assert seen == {"q": "Pamplona", "agent": "orientatrainer/0.1"}
    assert candidates == [PlaceCandidate(Coordinate(42.8125, -1.6458), "Pamplona, Navarra")]


def test_nominatim_http_error_becomes_network_error() -> None:
    geocoder = _nominatim(lambda request: httpx.Response(503))
    with pytest.raises(NetworkError):
        asyncio.run(geocoder.search("Toledo"))


def test_resolve_origin_uses_first_candidate() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {"lat": 37.3891, "lon": -5.9845, "display_name": "Sevilla"},
                {"lat": 0, "lon": 0, "display_name": "Elsewhere"},
            ],
        )

    resolved = asyncio.run(resolve_origin(_nominatim(handler), "Sevilla", fallback=FALLBACK, timeout=1))

    assert resolved.position == Coordinate(37.3891, -5.9845)
    assert resolved.label == "Sevilla"
    assert not resolved.used_fallback
    assert resolved.notice is None


def test_resolve_origin_falls_back_when_nothing_found() -> None:
    geocoder = _nominatim(lambda request: httpx.Response(200, json=[]))
    resolved = asyncio.run(resolve_origin(geocoder, "Atlantis", fallback=FALLBACK, timeout=1))
    assert resolved.position == FALLBACK
    assert resolved.used_fallback
    assert "Atlantis" in resolved.notice


def test_resolve_origin_falls_back_on_network_error() -> None:
    resolved = asyncio.run(resolve_origin(BrokenGeocoder(), "Cuenca", fallback=FALLBACK, timeout=1))
    assert resolved.position == FALLBACK
    assert resolved.used_fallback
    assert "failed" in resolved.notice


def test_resolve_origin_falls_back_on_timeout() -> None:
    resolved = asyncio.run(resolve_origin(SlowGeocoder(), "Soria", fallback=FALLBACK, timeout=0.01))
    assert resolved.position == FALLBACK
    assert "timed out" in resolved.notice


def test_resolve_origin_rejects_blank_query() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(resolve_origin(BrokenGeocoder(), "   ", fallback=FALLBACK, timeout=1))


def test_resolve_origin_propagates_cancellation() -> None:
    async def scenario() -> None:
        task = asyncio.create_task(resolve_origin(SlowGeocoder(), "Teruel", fallback=FALLBACK, timeout=10))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
