"""
Domain models (Pydantic).

These types are the contract between layers:
- marketplace records read from the catalog snapshot (`User`, `Location`, `Worker`, `Service`)
- validated query inputs (`NearbyQuery`, `LocationInput`)
- ranked outputs (`NearbyWorker`, `NearbyService`, `NearbyLocation`)

Validation lives here so bad coordinates are rejected before any search runs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from serabutan.core.geo import GeoPoint as CoreGeoPoint

Role = Literal["CLIENT", "WORKER"]


class User(BaseModel):
    """A marketplace account (never carries credentials)."""

    id: str
    name: str
    email: str
    role: Role = "CLIENT"
    phone: str | None = None


class Location(BaseModel):
    """A user's saved position."""

    id: str
    user_id: str
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def point(self) -> CoreGeoPoint:
        return CoreGeoPoint(lat=self.latitude, lon=self.longitude)


class Service(BaseModel):
    """A priced offering published by a worker."""

    id: str
    worker_id: str
    title: str
    description: str | None = None
    price: float = Field(..., ge=0)


class Worker(BaseModel):
    """Worker profile attached to a user with role WORKER."""

    id: str
    user_id: str
    bio: str | None = None
    price: float | None = Field(default=None, ge=0)
    skills: list[str] = Field(default_factory=list)
    services: list[Service] = Field(default_factory=list)

    @field_validator("skills")
    @classmethod
    def _normalize_skills(cls, skills: list[str]) -> list[str]:
        return list(dict.fromkeys(s.strip() for s in skills if s and s.strip()))


class WorkerProfile(BaseModel):
    """Repository view: a worker joined to its user and the user's optional location."""

    worker: Worker
    user: User
    location: Location | None = None


class MarketplaceSnapshot(BaseModel):
    """The JSON catalog layout read by `CatalogRepository`."""

    users: list[User] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
    workers: list[Worker] = Field(default_factory=list)


class NearbyQuery(BaseModel):
    """A proximity query: point plus radius cutoff in kilometers."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    max_distance_km: float = Field(10.0, gt=0, allow_inf_nan=False, alias="maxDistance")

    @property
    def point(self) -> CoreGeoPoint:
        return CoreGeoPoint(lat=self.lat, lon=self.lon)


class WorkerSummary(BaseModel):
    """Contact card for the worker offering a service."""

    id: str
    user_id: str
    name: str
    email: str
    phone: str | None = None
    location: Location | None = None


class NearbyWorker(BaseModel):
    worker: Worker
    user: User
    location: Location
    distance: float = Field(..., ge=0)


class WorkerService(BaseModel):
    """A service together with the contact card of the worker offering it."""

    id: str
    worker_id: str
    title: str
    description: str | None = None
    price: float
    worker: WorkerSummary


class NearbyService(WorkerService):
    distance: float = Field(..., ge=0)


class NearbyLocation(BaseModel):
    id: str
    user_id: str
    latitude: float
    longitude: float
    address: str | None = None
    user: User
    distance: float = Field(..., ge=0)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LocationInput(BaseModel):
    """Location payload where coordinates, an address, or both may be given."""

    latitude: float | None = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180, le=180, allow_inf_nan=False)
    address: str | None = None

    @field_validator("address")
    @classmethod
    def _blank_address_is_none(cls, address: str | None) -> str | None:
        if address is None or not address.strip():
            return None
        return address.strip()


class ResolvedLocation(BaseModel):
    """A location with both coordinates known (address when one could be found)."""

    latitude: float
    longitude: float
    address: str | None = None
