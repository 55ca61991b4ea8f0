"""Low-precision solar and lunar ephemerides.

Analytical series for the geocentric equatorial position of the Sun and
the Moon, accurate to a few tenths of a degree: enough to place map
markers and shade a day/night overlay, not enough for navigation.

Both series are driven by days since J2000.0 taken from a split Julian
Date, so no large Julian Day numbers are subtracted.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from core.coordinate_transforms import checked_asin
from core.errors import DomainViolation
from utils.constants import (
    AU_KM,
    DEG_TO_RAD,
    MOON_MAX_DECLINATION,
    MOON_MEAN_DISTANCE_KM,
    RAD_TO_DEG,
    SUN_DECLINATION_MARGIN,
    SUN_MAX_DECLINATION,
)
from utils.time_utils import Instant, days_since_j2000, julian_centuries


class Body(str, enum.Enum):
    SUN = "sun"
    MOON = "moon"


@dataclass(frozen=True, slots=True)
class EquatorialPosition:
    """Geocentric equatorial coordinates of a body at one instant."""

    body: Body
    right_ascension: float  # degrees [0, 360)
    declination: float  # degrees
    distance_km: float


def mean_obliquity(t: float) -> float:
    """Mean obliquity of the ecliptic (degrees) for Julian centuries t."""
    return 23.439291 - 0.0130042 * t


def _ecliptic_to_equatorial(
    lon_deg: float, lat_deg: float, obliquity_deg: float
) -> tuple[float, float]:
    """Ecliptic (lon, lat) -> equatorial (RA, dec), degrees."""
    lon = lon_deg * DEG_TO_RAD
    lat = lat_deg * DEG_TO_RAD
    eps = obliquity_deg * DEG_TO_RAD

    sin_lon = math.sin(lon)
    ra = math.atan2(
        sin_lon * math.cos(eps) - math.tan(lat) * math.sin(eps),
        math.cos(lon),
    )
    sin_dec = math.sin(lat) * math.cos(eps) + math.cos(lat) * math.sin(eps) * sin_lon
    dec = checked_asin(sin_dec, "sine of declination")
    return ((ra * RAD_TO_DEG) % 360.0, dec * RAD_TO_DEG)


def sun_declination_bound(obliquity: float) -> float:
    """Largest |declination| the Sun can reach for the given obliquity.

    The obliquity drifts by about 0.013 degrees per century, so before
    about 1916 the Sun climbs past SUN_MAX_DECLINATION.
    """
    return max(SUN_MAX_DECLINATION, obliquity + SUN_DECLINATION_MARGIN)


def _check_declination(body: Body, declination: float, bound: float) -> None:
    if not abs(declination) <= bound:
        raise DomainViolation(
            f"{body.value} declination",
            declination,
            f"exceeds the physical bound of +/-{bound} degrees",
        )


def sun_equatorial(instant: Instant) -> EquatorialPosition:
    """Geocentric equatorial position of the Sun.

    Mean longitude and mean anomaly, corrected by the equation of centre
    for the eccentricity of Earth's orbit.
    """
    d = days_since_j2000(instant)
    t = julian_centuries(d)

    l0 = (280.46646 + 36000.76983 * t + 0.0003032 * t ** 2) % 360.0
    m = (357.52911 + 35999.05029 * t - 0.0001537 * t ** 2) % 360.0
    m_rad = m * DEG_TO_RAD

    # Equation of centre
    c = (
        (1.914602 - 0.004817 * t - 0.000014 * t ** 2) * math.sin(m_rad)
        + (0.019993 - 0.000101 * t) * math.sin(2.0 * m_rad)
        + 0.000289 * math.sin(3.0 * m_rad)
    )
    true_lon = l0 + c

    obliquity = mean_obliquity(t)
    ra, dec = _ecliptic_to_equatorial(true_lon, 0.0, obliquity)
    _check_declination(Body.SUN, dec, sun_declination_bound(obliquity))

    dist_au = 1.000140 - 0.016708 * math.cos(m_rad) - 0.000141 * math.cos(2.0 * m_rad)
    return EquatorialPosition(
        body=Body.SUN,
        right_ascension=ra,
        declination=dec,
        distance_km=dist_au * AU_KM,
    )


def moon_equatorial(instant: Instant) -> EquatorialPosition:
    """Geocentric equatorial position of the Moon.

    Mean longitude plus the leading periodic terms: equation of centre,
    evection, variation, annual equation and reduction to the ecliptic.
    """
    d = days_since_j2000(instant)
    t = julian_centuries(d)

    l_mean = 218.316 + 13.176396 * d  # mean longitude
    m = (134.963 + 13.064993 * d) * DEG_TO_RAD  # mean anomaly
    f = (93.272 + 13.229350 * d) * DEG_TO_RAD  # argument of latitude
    elong = (297.850 + 12.190749 * d) * DEG_TO_RAD  # mean elongation
    m_sun = (357.529 + 0.98560028 * d) * DEG_TO_RAD

    lon = (
        l_mean
        + 6.289 * math.sin(m)
        + 1.274 * math.sin(2.0 * elong - m)  # evection
        + 0.658 * math.sin(2.0 * elong)  # variation
        + 0.214 * math.sin(2.0 * m)
        - 0.186 * math.sin(m_sun)  # annual equation
        - 0.114 * math.sin(2.0 * f)
    )
    lat = 5.128 * math.sin(f)

    ra, dec = _ecliptic_to_equatorial(lon, lat, mean_obliquity(t))
    _check_declination(Body.MOON, dec, MOON_MAX_DECLINATION)

    distance = (
        MOON_MEAN_DISTANCE_KM
        - 20905.0 * math.cos(m)
        - 3699.0 * math.cos(2.0 * elong - m)
        - 2956.0 * math.cos(2.0 * elong)
        - 570.0 * math.cos(2.0 * m)
    )
    return EquatorialPosition(
        body=Body.MOON,
        right_ascension=ra,
        declination=dec,
        distance_km=distance,
    )


_EPHEMERIDES = {
    Body.SUN: sun_equatorial,
    Body.MOON: moon_equatorial,
}


def body_equatorial(body: Body, instant: Instant) -> EquatorialPosition:
    """Dispatch to the ephemeris of the given body."""
    return _EPHEMERIDES[Body(body)](instant)
