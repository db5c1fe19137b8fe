"""
Nearby search (workers, services, locations) and per-worker service listings.

Each lookup fetches the full candidate set from the repository and hands it to
`find_nearby` with an accessor for the candidate's optional coordinate. The distance
computed by the engine is the one attached to the output; it is never recomputed.
"""

from __future__ import annotations

import logging

from serabutan.catalog.repository import MarketplaceRepository
from serabutan.core.geo import EARTH_RADIUS_KM, GeoPoint
from serabutan.core.proximity import find_nearby
from serabutan.domain.models import (
    Location,
    NearbyLocation,
    NearbyQuery,
    NearbyService,
    NearbyWorker,
    User,
    WorkerProfile,
    WorkerService,
    WorkerSummary,
)

logger = logging.getLogger(__name__)


def _profile_point(profile: WorkerProfile) -> GeoPoint | None:
    return profile.location.point if profile.location else None


def _location_point(row: tuple[Location, User]) -> GeoPoint:
    return row[0].point


def nearby_workers(
    repository: MarketplaceRepository, query: NearbyQuery, *, radius_km: float = EARTH_RADIUS_KM
) -> list[NearbyWorker]:
    """Workers whose user location lies within the query radius, nearest first."""
    profiles = repository.list_worker_profiles()
    ranked = find_nearby(
        query.point, query.max_distance_km, profiles, get_point=_profile_point, radius_km=radius_km
    )
    logger.info(
        "nearby workers lat=%.4f lon=%.4f max_km=%s: %d/%d",
        query.lat,
        query.lon,
        query.max_distance_km,
        len(ranked),
        len(profiles),
    )
    return [
        NearbyWorker(
            worker=r.item.worker,
            user=r.item.user,
            location=r.item.location,
            distance=r.distance_km,
        )
        for r in ranked
    ]


def _worker_summary(profile: WorkerProfile) -> WorkerSummary:
    return WorkerSummary(
        id=profile.worker.id,
        user_id=profile.worker.user_id,
        name=profile.user.name,
        email=profile.user.email,
        phone=profile.user.phone,
        location=profile.location,
    )


def nearby_services(
    repository: MarketplaceRepository, query: NearbyQuery, *, radius_km: float = EARTH_RADIUS_KM
) -> list[NearbyService]:
    """Services offered by workers within the query radius, nearest worker first.

    Every service inherits its worker's distance. Services of equally distant workers
    stay in catalog order (worker order, then service order).
    """
    profiles = repository.list_worker_profiles()
    ranked = find_nearby(
        query.point, query.max_distance_km, profiles, get_point=_profile_point, radius_km=radius_km
    )
    out: list[NearbyService] = []
    for r in ranked:
        summary = _worker_summary(r.item)
        for service in r.item.worker.services:
            out.append(
                NearbyService(
                    **service.model_dump(),
                    worker=summary,
                    distance=r.distance_km,
                )
            )
    logger.info(
        "nearby services lat=%.4f lon=%.4f max_km=%s: %d services from %d workers",
        query.lat,
        query.lon,
        query.max_distance_km,
        len(out),
        len(ranked),
    )
    return out


def nearby_locations(
    repository: MarketplaceRepository, query: NearbyQuery, *, radius_km: float = EARTH_RADIUS_KM
) -> list[NearbyLocation]:
    """Saved user locations within the query radius, nearest first."""
    rows = repository.list_locations()
    ranked = find_nearby(
        query.point, query.max_distance_km, rows, get_point=_location_point, radius_km=radius_km
    )
    logger.info(
        "nearby locations lat=%.4f lon=%.4f max_km=%s: %d/%d",
        query.lat,
        query.lon,
        query.max_distance_km,
        len(ranked),
        len(rows),
    )
    out: list[NearbyLocation] = []
    for r in ranked:
        loc, user = r.item
        out.append(
            NearbyLocation(
                **loc.model_dump(),
                user=user,
                distance=r.distance_km,
            )
        )
    return out


def services_by_worker(repository: MarketplaceRepository, worker_id: str) -> list[WorkerService] | None:
    """Services published by a worker, each with the worker's contact card.

    Returns None when the worker (or its user) is not in the catalog.
    """
    profile = repository.get_worker(worker_id)
    if profile is None:
        return None
    summary = _worker_summary(profile)
    services = repository.list_services_by_worker(worker_id) or []
    return [WorkerService(**s.model_dump(), worker=summary) for s in services]
