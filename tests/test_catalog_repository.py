import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from serabutan.catalog.repository import CatalogRepository, load_snapshot

SAMPLE_CATALOG = Path(__file__).resolve().parents[1] / "data" / "catalogs" / "marketplace.json"


def test_sample_catalog_loads():
    repo = CatalogRepository.from_path(SAMPLE_CATALOG)
    profiles = repo.list_worker_profiles()
    assert profiles
    assert all(p.user.id == p.worker.user_id for p in profiles)


def test_worker_profiles_join_user_and_location(repository):
    by_id = {p.worker.id: p for p in repository.list_worker_profiles()}

    assert by_id["w-budi"].location.id == "loc-budi"
    assert by_id["w-dedi"].location is None
    assert by_id["w-budi"].worker.skills == ["electrical", "ac repair"]


def test_get_worker_and_services(repository):
    assert repository.get_worker("w-citra").user.name == "Citra"
    assert repository.get_worker("missing") is None

    assert [s.id for s in repository.list_services_by_worker("w-budi")] == ["s-listrik", "s-ac"]
    assert repository.list_services_by_worker("w-eka") == []
    assert repository.list_services_by_worker("missing") is None


def test_orphan_records_are_skipped(tmp_path):
    payload = {
        "users": [{"id": "u1", "name": "One", "email": "one@example.com", "role": "WORKER"}],
        "locations": [
            {"id": "l1", "user_id": "u1", "latitude": 1, "longitude": 1},
            {"id": "l2", "user_id": "ghost", "latitude": 2, "longitude": 2},
        ],
        "workers": [
            {"id": "w1", "user_id": "u1"},
            {"id": "w2", "user_id": "ghost"},
        ],
    }
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    repo = CatalogRepository.from_path(path)
    assert [p.worker.id for p in repo.list_worker_profiles()] == ["w1"]
    assert [loc.id for loc, _ in repo.list_locations()] == ["l1"]


def test_out_of_range_coordinates_rejected(tmp_path):
    payload = {"users": [], "locations": [{"id": "l", "user_id": "u", "latitude": 91, "longitude": 0}]}
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_snapshot(path)
