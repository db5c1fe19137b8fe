import math

import pytest

from serabutan.core.geo import EARTH_RADIUS_KM, GeoPoint, distance_km

POINTS = [
    GeoPoint(lat=0, lon=0),
    GeoPoint(lat=-6.1751, lon=106.8650),
    GeoPoint(lat=51.5074, lon=-0.1278),
    GeoPoint(lat=-33.8688, lon=151.2093),
    GeoPoint(lat=89.9, lon=-179.9),
]


def test_distance_to_self_is_zero():
    for p in POINTS:
        assert distance_km(p, p) == 0


def test_distance_is_symmetric():
    for a in POINTS:
        for b in POINTS:
            assert distance_km(a, b) == pytest.approx(distance_km(b, a))


def test_distance_satisfies_triangle_inequality():
    for a in POINTS:
        for b in POINTS:
            for c in POINTS:
                assert distance_km(a, c) <= distance_km(a, b) + distance_km(b, c) + 1e-9


def test_quarter_of_equator():
    d = distance_km(GeoPoint(lat=0, lon=0), GeoPoint(lat=0, lon=90))
    assert d == pytest.approx(10007.54, abs=0.01)
    assert d == pytest.approx(EARTH_RADIUS_KM * math.pi / 2)


def test_antipodal_points_on_unit_sphere():
    assert distance_km(GeoPoint(lat=0, lon=0), GeoPoint(lat=0, lon=180), radius=1) == pytest.approx(math.pi)
    assert distance_km(GeoPoint(lat=90, lon=0), GeoPoint(lat=-90, lon=0), radius=1) == pytest.approx(math.pi)


def test_one_km_north_of_jakarta():
    d = distance_km(GeoPoint(lat=-6.1751, lon=106.8650), GeoPoint(lat=-6.1661, lon=106.8650))
    assert d == pytest.approx(1.0, abs=0.05)


def test_nan_propagates():
    assert math.isnan(distance_km(GeoPoint(lat=math.nan, lon=0), GeoPoint(lat=0, lon=0)))
