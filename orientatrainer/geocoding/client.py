"""Mini README: Place name lookup for route origins.

Structure:
    * PlaceCandidate - one geocoder match with coordinates and label.
    * GeocoderClient - abstract async lookup interface.
    * NominatimGeocoder - ``httpx`` client for Nominatim compatible services.
    * ResolvedOrigin - outcome of ``resolve_origin`` including fallbacks.
    * resolve_origin - timeout-bounded lookup that never aborts the caller.

Geocoding is the only network call in the route workflow. A failed, slow or
empty lookup is not fatal: ``resolve_origin`` substitutes the fallback
coordinate and records a notice so the user can still generate a route.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from ..errors import NetworkError, ValidationError
from ..logging_utils import get_logger
from ..utils.geodesy import Coordinate

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PlaceCandidate:
    """Single place returned by a geocoder."""

    position: Coordinate
    display_name: str

    @classmethod
    def from_payload(cls, payload: Any) -> "PlaceCandidate":
        """Parse a ``{"lat", "lon", "display_name"}`` entry; lat/lon may be strings."""

        if not isinstance(payload, dict):
            raise NetworkError(f"Unexpected geocoder entry: {payload!r}")
        try:
            position = Coordinate.validated(payload["lat"], payload["lon"])
        except (KeyError, ValidationError) as error:
            raise NetworkError(f"Geocoder returned unusable coordinates: {payload!r}") from error
        return cls(position=position, display_name=str(payload.get("display_name", "")))


class GeocoderClient(ABC):
    """Resolve free-text place names to candidate coordinates."""

    @abstractmethod
    async def search(self, query: str) -> List[PlaceCandidate]:
        """Return zero or more candidates, best match first.

        Implementations raise ``NetworkError`` when the lookup cannot complete.
        """


class NominatimGeocoder(GeocoderClient):
    """Query a Nominatim ``/search`` endpoint over HTTP."""

    def __init__(
        self,
        url: str = "https://nominatim.openstreetmap.org/search",
        *,
        user_agent: str = "orientatrainer/0.1",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    async def search(self, query: str) -> List[PlaceCandidate]:
        params = {"q": query, "format": "json", "limit": 1}
        headers = {"User-Agent": self.user_agent}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url, params=params, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as error:
            raise NetworkError(f"Geocoder request for '{query}' failed: {error}") from error
        except ValueError as error:
            raise NetworkError(f"Geocoder returned invalid JSON for '{query}'") from error

        if not isinstance(payload, list):
            raise NetworkError(f"Geocoder returned unexpected payload for '{query}'")
        return [PlaceCandidate.from_payload(entry) for entry in payload]


@dataclass(frozen=True, slots=True)
class ResolvedOrigin:
    """Coordinate chosen for a place name and how it was obtained."""

    position: Coordinate
    label: str
    used_fallback: bool
    notice: Optional[str] = None


async def resolve_origin(
    geocoder: GeocoderClient,
    query: str,
    *,
    fallback: Coordinate,
    timeout: float,
) -> ResolvedOrigin:
    """Look up ``query`` within ``timeout`` seconds, falling back on any failure.

    Cancellation of the calling task is propagated unchanged.
    """

    query = query.strip()
    if not query:
        raise ValidationError("A place name is required")

    try:
        candidates = await asyncio.wait_for(geocoder.search(query), timeout=timeout)
    except asyncio.TimeoutError:
        LOGGER.warning("Geocoder timed out after %ss for '%s'; using fallback origin", timeout, query)
        return ResolvedOrigin(
            position=fallback,
            label=query,
            used_fallback=True,
            notice=f"Location lookup for '{query}' timed out; using the default origin",
        )
    except NetworkError as error:
        LOGGER.warning("Geocoder failed for '%s': %s; using fallback origin", query, error)
        return ResolvedOrigin(
            position=fallback,
            label=query,
            used_fallback=True,
            notice=f"Location lookup for '{query}' failed; using the default origin",
        )

    if not candidates:
        LOGGER.info("Geocoder found no match for '%s'; using fallback origin", query)
        return ResolvedOrigin(
            position=fallback,
            label=query,
            used_fallback=True,
            notice=f"No place named '{query}' was found; using the default origin",
        )

    best = candidates[0]
    LOGGER.info("Resolved '%s' to (%.5f, %.5f)", query, best.position.lat, best.position.lng)
    return ResolvedOrigin(position=best.position, label=best.display_name or query, used_fallback=False)
