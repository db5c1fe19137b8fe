"""
Geocoding client (OpenStreetMap Nominatim).

Used when a user saves a location with only an address (forward lookup) or only
coordinates (reverse lookup, to attach a readable address).

Responses are cached on disk; on transport errors an expired cache entry is served
instead of failing when one exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from serabutan.config.settings import Settings
from serabutan.core.cache import FileCache
from serabutan.core.geo import GeoPoint
from serabutan.core.http import get_json
from serabutan.domain.models import LocationInput, ResolvedLocation

logger = logging.getLogger(__name__)


class GeocodingError(ValueError):
    """Raised when a location cannot be resolved to coordinates."""


@dataclass(frozen=True)
class GeocodeHit:
    point: GeoPoint
    formatted_address: str | None


class Geocoder(Protocol):
    def geocode(self, address: str) -> list[GeocodeHit]: ...

    def reverse(self, point: GeoPoint) -> list[GeocodeHit]: ...


def _parse_hit(row: Any) -> GeocodeHit | None:
    if not isinstance(row, dict):
        return None
    try:
        point = GeoPoint(lat=float(row["lat"]), lon=float(row["lon"]))
    except (KeyError, TypeError, ValueError):
        return None
    name = row.get("display_name")
    return GeocodeHit(point=point, formatted_address=str(name) if name else None)


class NominatimGeocoder:
    """Forward/reverse geocoding against a Nominatim instance."""

    def __init__(self, settings: Settings, cache: FileCache, *, client: httpx.Client | None = None):
        self._settings = settings
        self._cache = cache
        self._client = client

    def _get(self, endpoint: str, params: dict[str, Any]) -> Any:
        url = f"{self._settings.geocoder.base_url.rstrip('/')}/{endpoint}"
        headers = {"User-Agent": self._settings.geocoder.user_agent}
        logger.info("Nominatim %s %s", endpoint, params)
        return get_json(
            url,
            params=params,
            headers=headers,
            timeout_seconds=self._settings.app.http_timeout_seconds,
            client=self._client,
        )

    def _cached(self, key: str, endpoint: str, params: dict[str, Any]) -> Any:
        return self._cache.get_or_set(
            "nominatim",
            key,
            lambda: self._get(endpoint, params),
            ttl_seconds=self._settings.geocoder.cache_ttl_seconds,
            stale_if_error=True,
            stale_predicate=lambda exc: isinstance(exc, httpx.TransportError),
        )

    def geocode(self, address: str) -> list[GeocodeHit]:
        """Return candidate points for a free-text address (best match first)."""
        params = {"format": "jsonv2", "q": address, "limit": "5"}
        payload = self._cached(f"search:{address.strip().lower()}", "search", params)
        if not isinstance(payload, list):
            return []
        return [hit for hit in (_parse_hit(row) for row in payload) if hit is not None]

    def reverse(self, point: GeoPoint) -> list[GeocodeHit]:
        """Return the address at `point` (empty when Nominatim has none)."""
        params = {"format": "jsonv2", "lat": f"{point.lat:.6f}", "lon": f"{point.lon:.6f}", "zoom": "18"}
        payload = self._cached(f"reverse:{point.lat:.6f}:{point.lon:.6f}", "reverse", params)
        # Nominatim answers "nothing here" with 200 + {"error": "Unable to geocode"}.
        if not isinstance(payload, dict) or "error" in payload:
            return []
        hit = _parse_hit(payload)
        return [hit] if hit else []


def resolve_location(payload: LocationInput, geocoder: Geocoder) -> ResolvedLocation:
    """Fill in whichever of coordinates/address is missing.

    - address only: forward lookup, first hit wins and its formatted address replaces the input
    - coordinates only: reverse lookup for an address (left empty when none is found)

    Raises:
        GeocodingError: If the address has no match, or coordinates are still missing.
    """
    latitude = payload.latitude
    longitude = payload.longitude
    address = payload.address

    if address and (latitude is None or longitude is None):
        hits = geocoder.geocode(address)
        if not hits:
            raise GeocodingError("Invalid address: No geocoding result found")
        latitude = hits[0].point.lat
        longitude = hits[0].point.lon
        address = hits[0].formatted_address or address

    if latitude is not None and longitude is not None and not address:
        hits = geocoder.reverse(GeoPoint(lat=latitude, lon=longitude))
        if hits:
            address = hits[0].formatted_address

    if latitude is None or longitude is None:
        raise GeocodingError("Latitude and longitude are required or must be resolvable from address")

    return ResolvedLocation(latitude=latitude, longitude=longitude, address=address)
