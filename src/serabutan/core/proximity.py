"""
Proximity filter/rank over located candidates.

One generic routine shared by every "nearby" lookup: callers pass their own records
plus an accessor returning each record's optional coordinate.

This is a full scan (O(N) per query). A spatial index can replace the loop later as
long as the output stays radius-bounded, ascending and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, TypeVar

from serabutan.core.geo import EARTH_RADIUS_KM, GeoPoint, distance_km

T = TypeVar("T")


@dataclass(frozen=True)
class ProximityResult(Generic[T]):
    """A candidate annotated with its distance (km) from the query point."""

    item: T
    distance_km: float
    point: GeoPoint


def find_nearby(
    query: GeoPoint,
    max_distance_km: float,
    candidates: Iterable[T],
    *,
    get_point: Callable[[T], GeoPoint | None],
    radius_km: float = EARTH_RADIUS_KM,
) -> list[ProximityResult[T]]:
    """Return candidates within `max_distance_km` of `query`, nearest first.

    - Candidates whose accessor returns None are skipped.
    - The boundary is inclusive (`distance <= max_distance_km`).
    - Ties keep input order (`list.sort` is stable).

    `max_distance_km` must be validated (> 0) by the caller.
    """
    out: list[ProximityResult[T]] = []
    for item in candidates:
        point = get_point(item)
        if point is None:
            continue
        d = distance_km(query, point, radius=radius_km)
        if d <= max_distance_km:
            out.append(ProximityResult(item=item, distance_km=d, point=point))
    out.sort(key=lambda r: r.distance_km)
    return out
