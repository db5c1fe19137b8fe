"""
API routes.

Endpoints:
- GET  `/api/workers/nearby`: workers around a point, nearest first.
- GET  `/api/workers/{worker_id}`: one worker profile.
- GET  `/api/services/nearby`: services of nearby workers, nearest first.
- GET  `/api/services/worker/{worker_id}`: services published by a worker, with its contact card.
- GET  `/api/locations/nearby`: saved user locations around a point, nearest first.
- POST `/api/locations/resolve`: fill in missing coordinates/address via geocoding.

Query validation happens here; search code assumes well-formed input.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import httpx
from fastapi import APIRouter, Body, HTTPException, Query
from pydantic import ValidationError

from serabutan.catalog.repository import CatalogRepository, MarketplaceRepository
from serabutan.config.settings import get_settings
from serabutan.core.cache import FileCache
from serabutan.core.env import resolve_project_path
from serabutan.domain.models import (
    LocationInput,
    NearbyLocation,
    NearbyQuery,
    NearbyService,
    NearbyWorker,
    ResolvedLocation,
    WorkerProfile,
    WorkerService,
)
from serabutan.ingestion.geocoder import Geocoder, GeocodingError, NominatimGeocoder, resolve_location
from serabutan.search.nearby import nearby_locations, nearby_services, nearby_workers, services_by_worker

router = APIRouter()


@lru_cache
def _repository() -> MarketplaceRepository:
    settings = get_settings()
    return CatalogRepository.from_path(settings.catalog.path)


@lru_cache
def _geocoder() -> Geocoder:
    settings = get_settings()
    cache = FileCache(
        resolve_project_path(settings.cache.dir),
        enabled=settings.cache.enabled,
        default_ttl_seconds=settings.cache.default_ttl_seconds,
    )
    return NominatimGeocoder(settings, cache)


def _validation_error(message: str, errors: list | None = None) -> HTTPException:
    detail: dict = {"code": "VALIDATION_ERROR", "message": message}
    if errors is not None:
        detail["errors"] = errors
    return HTTPException(status_code=400, detail=detail)


def _internal_error(exc: Exception) -> HTTPException:
    return HTTPException(status_code=500, detail={"code": "INTERNAL_ERROR", "message": str(exc)})


def _parse_nearby_query(lat: str | None, lon: str | None, max_distance: str | None) -> NearbyQuery:
    """Validate raw query-string values into a `NearbyQuery` (HTTP 400 on failure)."""
    if lat is None or lon is None or not lat.strip() or not lon.strip():
        raise _validation_error("Latitude and longitude required")
    if max_distance is None or not max_distance.strip():
        max_distance = str(get_settings().search.default_max_distance_km)
    try:
        return NearbyQuery.model_validate({"lat": lat, "lon": lon, "maxDistance": max_distance})
    except ValidationError as e:
        raise _validation_error(
            "Invalid query parameters", e.errors(include_url=False, include_context=False)
        ) from e


@router.get("/api/workers/nearby", response_model=list[NearbyWorker])
def get_nearby_workers(
    lat: str | None = None,
    lon: str | None = None,
    max_distance: str | None = Query(default=None, alias="maxDistance"),
) -> list[NearbyWorker]:
    """Return workers within `maxDistance` km of (lat, lon), each with its `distance`."""
    query = _parse_nearby_query(lat, lon, max_distance)
    try:
        return nearby_workers(_repository(), query, radius_km=get_settings().search.earth_radius_km)
    except Exception as e:
        raise _internal_error(e) from e


@router.get("/api/workers/{worker_id}", response_model=WorkerProfile)
def get_worker(worker_id: str) -> WorkerProfile:
    """Return one worker with its user, skills, services and location."""
    try:
        profile = _repository().get_worker(worker_id)
    except Exception as e:
        raise _internal_error(e) from e
    if profile is None:
        raise HTTPException(status_code=404, detail={"code": "NOT_FOUND", "message": "Worker not found"})
    return profile


@router.get("/api/services/nearby", response_model=list[NearbyService])
def get_nearby_services(
    lat: str | None = None,
    lon: str | None = None,
    max_distance: str | None = Query(default=None, alias="maxDistance"),
) -> list[NearbyService]:
    """Return services offered by workers within `maxDistance` km, nearest worker first."""
    query = _parse_nearby_query(lat, lon, max_distance)
    try:
        return nearby_services(_repository(), query, radius_km=get_settings().search.earth_radius_km)
    except Exception as e:
        raise _internal_error(e) from e


@router.get("/api/services/worker/{worker_id}", response_model=list[WorkerService])
def get_services_by_worker(worker_id: str) -> list[WorkerService]:
    """Return the services published by a worker, each with the worker's contact card."""
    try:
        services = services_by_worker(_repository(), worker_id)
    except Exception as e:
        raise _internal_error(e) from e
    if services is None:
        raise HTTPException(status_code=404, detail={"code": "NOT_FOUND", "message": "Worker not found"})
    return services


@router.get("/api/locations/nearby", response_model=list[NearbyLocation])
def get_nearby_locations(
    lat: str | None = None,
    lon: str | None = None,
    max_distance: str | None = Query(default=None, alias="maxDistance"),
) -> list[NearbyLocation]:
    """Return saved user locations within `maxDistance` km, nearest first."""
    query = _parse_nearby_query(lat, lon, max_distance)
    try:
        return nearby_locations(_repository(), query, radius_km=get_settings().search.earth_radius_km)
    except Exception as e:
        raise _internal_error(e) from e


@router.post("/api/locations/resolve", response_model=ResolvedLocation)
def post_resolve_location(body: Any = Body(default=None)) -> ResolvedLocation:
    """Resolve a location payload to coordinates + address (nothing is stored)."""
    try:
        payload = LocationInput.model_validate(body)
    except ValidationError as e:
        raise _validation_error(
            "Invalid request body", e.errors(include_url=False, include_context=False)
        ) from e
    try:
        return resolve_location(payload, _geocoder())
    except GeocodingError as e:
        raise _validation_error(str(e)) from e
    except httpx.HTTPError as e:
        raise HTTPException(
            status_code=502,
            detail={"code": "GEOCODER_UNAVAILABLE", "message": str(e)},
        ) from e
