from dataclasses import dataclass

import pytest

from serabutan.core.geo import GeoPoint, distance_km
from serabutan.core.proximity import find_nearby


@dataclass
class Place:
    name: str
    point: GeoPoint | None


def _point(place: Place) -> GeoPoint | None:
    return place.point


ORIGIN = GeoPoint(lat=0, lon=0)


def test_origin_and_quarter_equator_cutoff():
    a = Place("A", GeoPoint(lat=0, lon=0))
    b = Place("B", GeoPoint(lat=0, lon=90))

    near = find_nearby(ORIGIN, 10, [b, a], get_point=_point)
    assert [r.item.name for r in near] == ["A"]
    assert near[0].distance_km == 0
    assert near[0].point == a.point

    far = find_nearby(ORIGIN, 10008, [b, a], get_point=_point)
    assert [r.item.name for r in far] == ["A", "B"]
    assert far[1].distance_km == pytest.approx(10007.54, abs=0.01)


def test_boundary_is_inclusive():
    p = Place("edge", GeoPoint(lat=0, lon=1))
    exact = distance_km(ORIGIN, p.point)
    assert [r.item for r in find_nearby(ORIGIN, exact, [p], get_point=_point)] == [p]


def test_unlocated_candidates_are_skipped():
    places = [Place("nowhere", None), Place("here", GeoPoint(lat=0.01, lon=0)), Place("also-nowhere", None)]
    out = find_nearby(ORIGIN, 100, places, get_point=_point)
    assert [r.item.name for r in out] == ["here"]


def test_results_sorted_and_within_radius():
    places = [Place(str(i), GeoPoint(lat=(i * 37 % 11) / 100, lon=(i * 13 % 7) / 100)) for i in range(40)]
    out = find_nearby(ORIGIN, 8, places, get_point=_point)

    distances = [r.distance_km for r in out]
    assert distances == sorted(distances)
    assert all(d <= 8 for d in distances)
    assert len(out) < len(places)


def test_ties_keep_input_order():
    same = GeoPoint(lat=0.05, lon=0.05)
    first, second, closer = Place("first", same), Place("second", same), Place("closer", GeoPoint(lat=0.01, lon=0))

    out = find_nearby(ORIGIN, 50, [first, second, closer], get_point=_point)
    assert [r.item.name for r in out] == ["closer", "first", "second"]

    out = find_nearby(ORIGIN, 50, [second, closer, first], get_point=_point)
    assert [r.item.name for r in out] == ["closer", "second", "first"]


def test_empty_candidates_and_no_mutation():
    assert find_nearby(ORIGIN, 10, [], get_point=_point) == []

    places = [Place("far", GeoPoint(lat=1, lon=1)), Place("near", GeoPoint(lat=0, lon=0))]
    snapshot = list(places)
    find_nearby(ORIGIN, 500, places, get_point=_point)
    assert places == snapshot


def test_accessor_called_once_per_candidate():
    calls: list[str] = []

    def get_point(place: Place) -> GeoPoint | None:
        calls.append(place.name)
        return place.point

    find_nearby(ORIGIN, 500, [Place("a", GeoPoint(lat=0, lon=0)), Place("b", None)], get_point=get_point)
    assert calls == ["a", "b"]


def test_custom_radius_scales_distance():
    p = Place("q", GeoPoint(lat=0, lon=90))
    out = find_nearby(ORIGIN, 2, [p], get_point=_point, radius_km=1)
    assert out[0].distance_km == pytest.approx(1.5707963, abs=1e-6)
