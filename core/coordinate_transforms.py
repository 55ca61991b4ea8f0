"""Angle and coordinate-frame helpers for the celestial engine.

Provides:
- degree/radian conversion and longitude/azimuth normalization
- the geographic and horizon value objects shared by every query
- equatorial (hour angle, declination) -> horizontal (altitude, azimuth)
- refraction and lunar parallax corrections for horizon altitudes
- longitude unwrapping for polylines drawn on a flat map

All angles in degrees unless suffixed with _rad.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from core.errors import DomainViolation, InputOutOfRange
from utils.constants import DEG_TO_RAD, RAD_TO_DEG, TRIG_DOMAIN_EPSILON


# =============================================================================
# Scalar conversions
# =============================================================================

def to_radians(degrees: float) -> float:
    return degrees * DEG_TO_RAD


def to_degrees(radians: float) -> float:
    return radians * RAD_TO_DEG


def normalize_longitude(lon_deg: float) -> float:
    """Wrap a longitude into (-180, 180]."""
    lon = math.fmod(lon_deg, 360.0)
    if lon <= -180.0:
        lon += 360.0
    elif lon > 180.0:
        lon -= 360.0
    return lon


def normalize_azimuth(az_deg: float) -> float:
    """Wrap an azimuth into [0, 360)."""
    az = az_deg % 360.0
    if az >= 360.0:
        az = 0.0
    return az


def checked_acos(value: float, quantity: str) -> float:
    """acos in radians that refuses arguments outside [-1, 1].

    Arguments within TRIG_DOMAIN_EPSILON of the bounds are rounding noise
    and are pinned to the bound.
    """
    if not -1.0 - TRIG_DOMAIN_EPSILON <= value <= 1.0 + TRIG_DOMAIN_EPSILON:
        raise DomainViolation(quantity, value, "acos argument outside [-1, 1]")
    return math.acos(min(1.0, max(-1.0, value)))


def checked_asin(value: float, quantity: str) -> float:
    """asin in radians that refuses arguments outside [-1, 1]."""
    if not -1.0 - TRIG_DOMAIN_EPSILON <= value <= 1.0 + TRIG_DOMAIN_EPSILON:
        raise DomainViolation(quantity, value, "asin argument outside [-1, 1]")
    return math.asin(min(1.0, max(-1.0, value)))


# =============================================================================
# Value objects
# =============================================================================

def finite_number(field: str, value) -> float:
    """Validate a caller-supplied real number (Python or numpy scalar)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating, np.integer)):
        raise InputOutOfRange(field, value, "expected a real number")
    value = float(value)
    if not math.isfinite(value):
        raise InputOutOfRange(field, value, "must be finite")
    return value


@dataclass(frozen=True, slots=True)
class GeographicPoint:
    """A point on Earth's surface.

    latitude is in [-90, 90] and longitude in (-180, 180]; -180 is
    stored as 180.
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        lat = finite_number("latitude", self.latitude)
        lon = finite_number("longitude", self.longitude)
        if not -90.0 <= lat <= 90.0:
            raise InputOutOfRange("latitude", lat, "must be within [-90, 90]")
        if not -180.0 <= lon <= 180.0:
            raise InputOutOfRange("longitude", lon, "must be within [-180, 180]")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", normalize_longitude(lon))

    @classmethod
    def from_unbounded(cls, latitude: float, longitude: float) -> GeographicPoint:
        """Build a point from a computed longitude of any magnitude."""
        return cls(latitude, normalize_longitude(finite_number("longitude", longitude)))

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class HorizonPosition:
    """A body's position in an observer's local sky."""

    altitude: float  # degrees above the horizon, negative below
    azimuth: float  # degrees [0, 360) clockwise from true north


# =============================================================================
# Equatorial -> Horizontal
# =============================================================================

def equatorial_to_horizontal(
    hour_angle_deg: float,
    declination_deg: float,
    latitude_deg: float,
) -> tuple[float, float]:
    """Convert local hour angle and declination to altitude and azimuth.

    Works through the East-North-Up components of the body's unit
    direction so altitude comes from atan2 and never from an asin of a
    rounded value.

    Returns:
        (altitude_deg, azimuth_deg)
        altitude: [-90, 90] above the local horizon
        azimuth: [0, 360) clockwise from north
    """
    h = hour_angle_deg * DEG_TO_RAD
    dec = declination_deg * DEG_TO_RAD
    lat = latitude_deg * DEG_TO_RAD

    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    sin_dec = math.sin(dec)
    cos_dec = math.cos(dec)
    cos_h = math.cos(h)

    east = -cos_dec * math.sin(h)
    north = cos_lat * sin_dec - sin_lat * cos_dec * cos_h
    up = sin_lat * sin_dec + cos_lat * cos_dec * cos_h

    altitude = math.atan2(up, math.hypot(east, north)) * RAD_TO_DEG
    azimuth = normalize_azimuth(math.atan2(east, north) * RAD_TO_DEG)
    return (altitude, azimuth)


def refraction_correction(altitude_deg: float) -> float:
    """Bennett atmospheric refraction, in degrees, for a geometric altitude.

    Below -1 degree the correction fades linearly to zero at the nadir.
    """
    if altitude_deg < -90.0 or altitude_deg > 90.0:
        return 0.0
    hd = max(altitude_deg, -1.0)
    refraction = (1.02 / math.tan((hd + 10.3 / (hd + 5.11)) * DEG_TO_RAD)) / 60.0
    if altitude_deg < -1.0:
        refraction *= (altitude_deg + 90.0) / 89.0
    return refraction


def parallax_correction(altitude_deg: float, distance_km: float, radius_km: float) -> float:
    """Geocentric-to-topocentric altitude drop, in degrees, for a near body."""
    horizontal_parallax = math.asin(radius_km / distance_km)
    return horizontal_parallax * math.cos(altitude_deg * DEG_TO_RAD) * RAD_TO_DEG


# =============================================================================
# Polyline helpers
# =============================================================================

def unwrap_longitudes(longitudes_deg: np.ndarray) -> np.ndarray:
    """Remove +/-360 jumps so consecutive longitudes stay continuous."""
    lons = np.asarray(longitudes_deg, dtype=np.float64)
    if lons.size == 0:
        return lons
    return np.unwrap(lons, period=360.0)
