"""
Marketplace catalog repository.

The catalog is a local JSON snapshot (default: `data/catalogs/marketplace.json`) with
users, their locations and worker profiles (services nested under each worker). We
validate it into typed Pydantic models so search code can assume a consistent shape.

Search code depends only on the `MarketplaceRepository` protocol; a database-backed
implementation can replace `CatalogRepository` without touching it.
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter

from serabutan.core.env import resolve_project_path
from serabutan.domain.models import Location, MarketplaceSnapshot, Service, User, Worker, WorkerProfile

logger = logging.getLogger(__name__)

_SNAPSHOT_ADAPTER = TypeAdapter(MarketplaceSnapshot)


class MarketplaceRepository(Protocol):
    def list_worker_profiles(self) -> list[WorkerProfile]: ...

    def list_locations(self) -> list[tuple[Location, User]]: ...

    def get_worker(self, worker_id: str) -> WorkerProfile | None: ...

    def list_services_by_worker(self, worker_id: str) -> list[Service] | None: ...


def load_snapshot(path: str | Path) -> MarketplaceSnapshot:
    """Load and validate a marketplace snapshot JSON file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    return _SNAPSHOT_ADAPTER.validate_python(payload)


class CatalogRepository:
    """Read-only repository over an in-memory `MarketplaceSnapshot`."""

    def __init__(self, snapshot: MarketplaceSnapshot):
        self._snapshot = snapshot

    @classmethod
    def from_path(cls, path: str | Path) -> "CatalogRepository":
        return cls(load_snapshot(path))

    @cached_property
    def _users_by_id(self) -> dict[str, User]:
        return {u.id: u for u in self._snapshot.users}

    @cached_property
    def _locations_by_user(self) -> dict[str, Location]:
        # One location per user; a later row wins, as an upsert would leave it.
        return {loc.user_id: loc for loc in self._snapshot.locations}

    def _profile(self, worker: Worker) -> WorkerProfile | None:
        user = self._users_by_id.get(worker.user_id)
        if user is None:
            logger.warning("Skipping worker %s: user %s not in catalog", worker.id, worker.user_id)
            return None
        return WorkerProfile(worker=worker, user=user, location=self._locations_by_user.get(user.id))

    def list_worker_profiles(self) -> list[WorkerProfile]:
        """All workers with their user and optional location, in catalog order."""
        out: list[WorkerProfile] = []
        for w in self._snapshot.workers:
            profile = self._profile(w)
            if profile is not None:
                out.append(profile)
        return out

    def list_locations(self) -> list[tuple[Location, User]]:
        """All saved locations joined to their user, in catalog order."""
        out: list[tuple[Location, User]] = []
        for loc in self._snapshot.locations:
            user = self._users_by_id.get(loc.user_id)
            if user is None:
                logger.warning("Skipping location %s: user %s not in catalog", loc.id, loc.user_id)
                continue
            out.append((loc, user))
        return out

    def get_worker(self, worker_id: str) -> WorkerProfile | None:
        for w in self._snapshot.workers:
            if w.id == worker_id:
                return self._profile(w)
        return None

    def list_services_by_worker(self, worker_id: str) -> list[Service] | None:
        """Services of a worker, or None when the worker does not exist."""
        for w in self._snapshot.workers:
            if w.id == worker_id:
                return list(w.services)
        return None
