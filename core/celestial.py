"""Sub-body points and local horizon positions of the Sun and Moon.

The geographic longitude under a body is where its local hour angle is
zero: lon = RA - GMST. The same GMST-referenced hour angle drives the
observer's horizon position, so map markers and sky positions always
agree.
"""

from __future__ import annotations

from core.coordinate_transforms import (
    GeographicPoint,
    HorizonPosition,
    equatorial_to_horizontal,
    normalize_longitude,
    parallax_correction,
    refraction_correction,
)
from core.ephemeris import Body, EquatorialPosition, body_equatorial
from core.errors import InputOutOfRange
from utils.constants import R_EARTH_EQUATORIAL
from utils.time_utils import Instant, gmst_degrees


def resolve_body(body) -> Body:
    """Accept a Body or its name ("sun", "moon")."""
    try:
        return Body(body.lower() if isinstance(body, str) else body)
    except ValueError as exc:
        raise InputOutOfRange("body", body, "expected 'sun' or 'moon'") from exc


def _sub_point(position: EquatorialPosition, gmst: float) -> GeographicPoint:
    return GeographicPoint.from_unbounded(
        position.declination, position.right_ascension - gmst
    )


def sub_body_point(body, instant: Instant) -> GeographicPoint:
    """Geographic point where the body is directly overhead."""
    position = body_equatorial(resolve_body(body), instant)
    return _sub_point(position, gmst_degrees(instant))


def subsolar_point(instant: Instant) -> GeographicPoint:
    return sub_body_point(Body.SUN, instant)


def sublunar_point(instant: Instant) -> GeographicPoint:
    return sub_body_point(Body.MOON, instant)


def local_hour_angle(gmst: float, observer_lon: float, right_ascension: float) -> float:
    """Local hour angle in degrees, in (-180, 180]."""
    return normalize_longitude(gmst + observer_lon - right_ascension)


def horizon_position(
    body,
    instant: Instant,
    observer: GeographicPoint,
    refraction: bool = False,
) -> HorizonPosition:
    """Altitude and azimuth of the Sun or Moon for a sea-level observer.

    Args:
        body: Body.SUN / Body.MOON or "sun" / "moon".
        instant: aware datetime or UTC epoch milliseconds.
        observer: observer location.
        refraction: add standard atmospheric refraction to the altitude.

    Returns:
        HorizonPosition with azimuth clockwise from true north.
    """
    if not isinstance(observer, GeographicPoint):
        raise InputOutOfRange("observer", observer, "expected a GeographicPoint")
    body = resolve_body(body)

    position = body_equatorial(body, instant)
    lha = local_hour_angle(
        gmst_degrees(instant), observer.longitude, position.right_ascension
    )
    altitude, azimuth = equatorial_to_horizontal(
        lha, position.declination, observer.latitude
    )

    if body is Body.MOON:
        altitude -= parallax_correction(
            altitude, position.distance_km, R_EARTH_EQUATORIAL
        )
    if refraction:
        altitude += refraction_correction(altitude)

    return HorizonPosition(altitude=altitude, azimuth=azimuth)
