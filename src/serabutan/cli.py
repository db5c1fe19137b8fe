"""
Serabutan CLI entrypoint.

For quick local queries against the catalog snapshot without running the API.
It delegates to `serabutan.search.nearby` and `serabutan.ingestion.geocoder`.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

import httpx
from pydantic import BaseModel

from serabutan.catalog.repository import CatalogRepository
from serabutan.config.settings import get_settings
from serabutan.core.cache import FileCache
from serabutan.core.env import resolve_project_path
from serabutan.core.logging import configure_logging
from serabutan.domain.models import LocationInput, NearbyQuery
from serabutan.ingestion.geocoder import NominatimGeocoder, resolve_location
from serabutan.search.nearby import nearby_locations, nearby_services, nearby_workers

_SEARCHES = {
    "workers": nearby_workers,
    "services": nearby_services,
    "locations": nearby_locations,
}


def _describe(kind: str, row: Any) -> str:
    if kind == "workers":
        return f"{row.user.name} ({row.worker.id})"
    if kind == "services":
        return f"{row.title} by {row.worker.name} @ {row.price:g}"
    return f"{row.user.name}: {row.address or f'{row.latitude:.5f},{row.longitude:.5f}'}"


def _dump(rows: list[BaseModel]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in rows], ensure_ascii=False, indent=2)


def _cmd_nearby(args: argparse.Namespace) -> int:
    """Handle the `nearby` subcommand."""
    settings = get_settings()
    max_distance = args.max_distance if args.max_distance is not None else settings.search.default_max_distance_km
    query = NearbyQuery(lat=args.lat, lon=args.lon, max_distance_km=max_distance)

    repository = CatalogRepository.from_path(args.catalog or settings.catalog.path)
    rows = _SEARCHES[args.kind](repository, query, radius_km=settings.search.earth_radius_km)

    if args.json:
        print(_dump(rows))
        return 0

    print(f"{len(rows)} {args.kind} within {query.max_distance_km:g} km of ({query.lat}, {query.lon})")
    for i, row in enumerate(rows, start=1):
        print(f"{i:>3}. {row.distance:8.3f} km  {_describe(args.kind, row)}")
    return 0


def _cmd_geocode(args: argparse.Namespace) -> int:
    """Handle the `geocode` subcommand."""
    settings = get_settings()
    cache = FileCache(
        resolve_project_path(settings.cache.dir),
        enabled=settings.cache.enabled,
        default_ttl_seconds=settings.cache.default_ttl_seconds,
    )
    geocoder = NominatimGeocoder(settings, cache)
    resolved = resolve_location(
        LocationInput(latitude=args.lat, longitude=args.lon, address=args.address), geocoder
    )
    print(json.dumps(resolved.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser (subcommands: nearby, geocode)."""
    parser = argparse.ArgumentParser(prog="serabutan", description="Serabutan marketplace tools.")
    sub = parser.add_subparsers(dest="command", required=True)

    near = sub.add_parser("nearby", help="Rank catalog workers/services/locations by distance.")
    near.add_argument("kind", choices=sorted(_SEARCHES))
    near.add_argument("--lat", type=float, required=True)
    near.add_argument("--lon", type=float, required=True)
    near.add_argument("--max-distance", dest="max_distance", type=float, default=None, help="Radius in km")
    near.add_argument("--catalog", default=None, help="Override catalog JSON path")
    near.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    near.set_defaults(func=_cmd_nearby)

    geo = sub.add_parser("geocode", help="Resolve an address to coordinates (or coordinates to an address).")
    geo.add_argument("--address", default=None)
    geo.add_argument("--lat", type=float, default=None)
    geo.add_argument("--lon", type=float, default=None)
    geo.set_defaults(func=_cmd_geocode)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m serabutan.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ValueError as e:
        # Covers pydantic.ValidationError and GeocodingError.
        parser.exit(2, f"error: {e}\n")
    except httpx.HTTPError as e:
        parser.exit(1, f"error: geocoder unavailable: {e}\n")


if __name__ == "__main__":
    raise SystemExit(main())
