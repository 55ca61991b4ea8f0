"""
Tests for sub-solar / sub-lunar points and observer horizon positions.
"""
import math
from datetime import datetime, timedelta, timezone

import pytest

from core.celestial import (
    horizon_position,
    local_hour_angle,
    resolve_body,
    sub_body_point,
    sublunar_point,
    subsolar_point,
)
from core.coordinate_transforms import GeographicPoint, normalize_longitude
from core.ephemeris import Body
from core.errors import InputOutOfRange
from utils.constants import MOON_MAX_DECLINATION

EQUINOX_NOON = datetime(2024, 3, 20, 12, 0, 0, tzinfo=timezone.utc)
EQUINOX_NOON_MS = 1710936000000


def _lon_delta(a: float, b: float) -> float:
    return normalize_longitude(b - a)


def _angular_distance(a: GeographicPoint, b: GeographicPoint) -> float:
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)
    cos_d = (
        math.sin(lat1) * math.sin(lat2)
        + math.cos(lat1) * math.cos(lat2) * math.cos(dlon)
    )
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_d))))


class TestSubsolarPoint:

    def test_equinox_noon(self):
        p = subsolar_point(EQUINOX_NOON)
        assert p.latitude == pytest.approx(0.0, abs=1.0)
        # Equation of time puts the Sun a few minutes late at Greenwich
        assert p.longitude == pytest.approx(0.0, abs=5.0)

    def test_june_solstice_north_of_equator(self):
        p = subsolar_point(datetime(2024, 6, 21, 12, tzinfo=timezone.utc))
        assert p.latitude == pytest.approx(23.44, abs=0.05)

    def test_moves_west_fifteen_degrees_per_hour(self):
        a = subsolar_point(EQUINOX_NOON)
        b = subsolar_point(EQUINOX_NOON + timedelta(hours=1))
        assert _lon_delta(a.longitude, b.longitude) == pytest.approx(-15.0, abs=0.05)

    def test_latitude_bounded_over_a_century(self):
        start = datetime(1950, 1, 1, tzinfo=timezone.utc)
        for day in range(0, 36525, 37):
            p = subsolar_point(start + timedelta(days=day, minutes=day))
            assert -23.45 <= p.latitude <= 23.45
            assert -180.0 < p.longitude <= 180.0

    def test_early_twentieth_century_solstice(self):
        p = subsolar_point(datetime(1900, 6, 21, 12, tzinfo=timezone.utc))
        assert 23.45 < p.latitude < 23.46

    def test_latitude_continuous_second_to_second(self):
        prev = subsolar_point(EQUINOX_NOON)
        for s in range(1, 120):
            cur = subsolar_point(EQUINOX_NOON + timedelta(seconds=s))
            assert abs(cur.latitude - prev.latitude) < 0.01
            assert abs(_lon_delta(prev.longitude, cur.longitude)) < 0.01
            prev = cur

    def test_epoch_millis_same_as_datetime(self):
        assert subsolar_point(EQUINOX_NOON_MS) == subsolar_point(EQUINOX_NOON)

    def test_idempotent(self):
        assert subsolar_point(EQUINOX_NOON) == subsolar_point(EQUINOX_NOON)


class TestSublunarPoint:

    def test_bounded(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for hours in range(0, 24 * 60, 5):
            p = sublunar_point(start + timedelta(hours=hours))
            assert abs(p.latitude) <= MOON_MAX_DECLINATION
            assert -180.0 < p.longitude <= 180.0

    def test_lags_the_sun_each_hour(self):
        a = sublunar_point(EQUINOX_NOON)
        b = sublunar_point(EQUINOX_NOON + timedelta(hours=1))
        assert -14.75 < _lon_delta(a.longitude, b.longitude) < -14.1

    def test_dispatch_by_name(self):
        assert sub_body_point("moon", EQUINOX_NOON) == sublunar_point(EQUINOX_NOON)
        assert sub_body_point(Body.SUN, EQUINOX_NOON) == subsolar_point(EQUINOX_NOON)


class TestHorizonPosition:

    def test_sun_overhead_at_subsolar_point(self):
        sub = subsolar_point(EQUINOX_NOON)
        pos = horizon_position(Body.SUN, EQUINOX_NOON, sub)
        assert pos.altitude == pytest.approx(90.0, abs=1e-6)

    def test_moon_overhead_at_sublunar_point(self):
        sub = sublunar_point(EQUINOX_NOON)
        pos = horizon_position("moon", EQUINOX_NOON, sub)
        assert pos.altitude == pytest.approx(90.0, abs=0.01)

    def test_solar_noon_north_of_subsolar_point(self):
        sub = subsolar_point(EQUINOX_NOON)
        observer = GeographicPoint(sub.latitude + 40.0, sub.longitude)
        pos = horizon_position(Body.SUN, EQUINOX_NOON, observer)
        assert pos.altitude == pytest.approx(90.0 - 40.0, abs=1.0)
        assert pos.azimuth == pytest.approx(180.0, abs=0.5)

    def test_solar_noon_south_of_subsolar_point(self):
        sub = subsolar_point(EQUINOX_NOON)
        observer = GeographicPoint(sub.latitude - 25.0, sub.longitude)
        pos = horizon_position(Body.SUN, EQUINOX_NOON, observer)
        assert pos.altitude == pytest.approx(65.0, abs=1.0)
        assert min(pos.azimuth, 360.0 - pos.azimuth) < 0.5

    def test_antipode_is_nadir(self):
        sub = subsolar_point(EQUINOX_NOON)
        antipode = GeographicPoint.from_unbounded(-sub.latitude, sub.longitude + 180.0)
        pos = horizon_position(Body.SUN, EQUINOX_NOON, antipode)
        assert pos.altitude == pytest.approx(-90.0, abs=1e-6)

    @pytest.mark.parametrize("lat, lon", [
        (51.5, -0.13), (-33.87, 151.21), (35.68, 139.76), (64.1, -21.9), (-54.8, -68.3),
    ])
    def test_altitude_is_complement_of_distance_to_subsolar_point(self, lat, lon):
        observer = GeographicPoint(lat, lon)
        sub = subsolar_point(EQUINOX_NOON)
        pos = horizon_position(Body.SUN, EQUINOX_NOON, observer)
        assert pos.altitude == pytest.approx(90.0 - _angular_distance(observer, sub), abs=1e-6)
        assert 0.0 <= pos.azimuth < 360.0

    def test_afternoon_sun_in_the_west(self):
        sub = subsolar_point(EQUINOX_NOON)
        observer = GeographicPoint.from_unbounded(0.0, sub.longitude + 60.0)
        pos = horizon_position(Body.SUN, EQUINOX_NOON, observer)
        assert pos.altitude == pytest.approx(30.0, abs=0.5)
        assert 260.0 < pos.azimuth < 280.0

    def test_refraction_lifts_the_sun_near_the_horizon(self):
        sub = subsolar_point(EQUINOX_NOON)
        observer = GeographicPoint.from_unbounded(0.0, sub.longitude + 90.0)
        plain = horizon_position(Body.SUN, EQUINOX_NOON, observer)
        refracted = horizon_position(Body.SUN, EQUINOX_NOON, observer, refraction=True)
        assert plain.altitude == pytest.approx(0.0, abs=0.3)
        assert 0.3 < refracted.altitude - plain.altitude < 0.7
        assert refracted.azimuth == plain.azimuth

    def test_moon_parallax_lowers_altitude(self):
        sub = sublunar_point(EQUINOX_NOON)
        observer = GeographicPoint.from_unbounded(0.0, sub.longitude + 80.0)
        pos = horizon_position(Body.MOON, EQUINOX_NOON, observer)
        geocentric = 90.0 - _angular_distance(observer, sub)
        assert 0.8 < geocentric - pos.altitude < 1.05

    def test_idempotent(self):
        observer = GeographicPoint(48.85, 2.35)
        assert horizon_position("sun", EQUINOX_NOON, observer) == horizon_position(
            "sun", EQUINOX_NOON, observer
        )

    def test_rejects_unknown_body(self):
        with pytest.raises(InputOutOfRange):
            horizon_position("mars", EQUINOX_NOON, GeographicPoint(0.0, 0.0))

    def test_rejects_raw_tuple_observer(self):
        with pytest.raises(InputOutOfRange):
            horizon_position(Body.SUN, EQUINOX_NOON, (0.0, 0.0))


class TestHelpers:

    def test_resolve_body(self):
        assert resolve_body("SUN") is Body.SUN
        assert resolve_body(Body.MOON) is Body.MOON
        with pytest.raises(InputOutOfRange):
            resolve_body(3)

    def test_local_hour_angle_wraps(self):
        assert local_hour_angle(350.0, 20.0, 10.0) == pytest.approx(0.0)
        assert local_hour_angle(10.0, 0.0, 200.0) == pytest.approx(170.0)
