import numpy as np
import pytest

from nosh.geo.distance import distance, format_distance, haversine_miles
from nosh.geo.models import Coordinate

MARIOS = Coordinate(lat=37.781, lng=-122.41)
GARDEN = Coordinate(lat=37.786, lng=-122.407)
SPICE = Coordinate(lat=37.776, lng=-122.415)

PAIRS = [
    (MARIOS, GARDEN),
    (GARDEN, SPICE),
    (Coordinate(lat=0.0, lng=0.0), Coordinate(lat=0.0, lng=180.0)),
    (Coordinate(lat=-33.87, lng=151.21), Coordinate(lat=51.51, lng=-0.13)),
    (Coordinate(lat=90.0, lng=0.0), Coordinate(lat=-90.0, lng=0.0)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric(a, b):
    assert distance(a, b) == pytest.approx(distance(b, a))


@pytest.mark.parametrize("a,_", PAIRS)
def test_distance_to_self_is_zero(a, _):
    assert distance(a, a) == 0.0


def test_quarter_meridian_matches_earth_radius():
    # equator to pole is a quarter of a great circle
    d = distance(Coordinate(lat=0.0, lng=0.0), Coordinate(lat=90.0, lng=0.0))
    assert d == pytest.approx(np.pi / 2 * 3958.761)


def test_seed_restaurants_are_under_a_mile_apart():
    d = distance(MARIOS, GARDEN)
    assert 0.3 < d < 0.5


def test_vectorised_matches_scalar():
    lats = np.array([GARDEN.lat, SPICE.lat])
    lngs = np.array([GARDEN.lng, SPICE.lng])
    out = haversine_miles(MARIOS.lat, MARIOS.lng, lats, lngs)
    assert out[0] == pytest.approx(distance(MARIOS, GARDEN))
    assert out[1] == pytest.approx(distance(MARIOS, SPICE))


def test_format_distance():
    assert format_distance(None) == "—"
    assert format_distance(0.456) == "0.46 mi"
    assert format_distance(3.14159) == "3.1 mi"
