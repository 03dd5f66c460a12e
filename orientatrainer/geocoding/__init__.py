"""Mini README: Geocoding adapters used to turn place names into origins.

The ``client`` module defines the abstract ``GeocoderClient``, the
``NominatimGeocoder`` HTTP implementation and ``resolve_origin`` which wraps
lookups with a timeout and a fallback coordinate.
"""

from .client import GeocoderClient, NominatimGeocoder, PlaceCandidate, ResolvedOrigin, resolve_origin

__all__ = [
    "GeocoderClient",
    "NominatimGeocoder",
    "PlaceCandidate",
    "ResolvedOrigin",
    "resolve_origin",
]
