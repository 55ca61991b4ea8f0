"""Time conversion utilities for the celestial engine.

Provides conversions between instants (aware datetimes or UTC epoch
milliseconds), split Julian Dates and Greenwich Mean Sidereal Time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Union

from sgp4.api import jday

from core.errors import InputOutOfRange
from utils.constants import (
    DAYS_PER_JULIAN_CENTURY,
    GMST_AT_J2000,
    GMST_RATE_PER_DAY,
    GMST_T2,
    GMST_T3_DIVISOR,
    JD_J2000,
    JD_UNIX_EPOCH,
    MILLIS_PER_DAY,
)

# Aware datetime, or UTC epoch milliseconds.
Instant = Union[datetime, int, float]

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class JulianDate:
    """Split Julian Date.

    jd carries the half-integer day number and fr the fraction of the
    day, so differences against J2000 never subtract two large floats.
    """

    jd: float
    fr: float

    @property
    def full(self) -> float:
        return self.jd + self.fr

    @property
    def days_since_j2000(self) -> float:
        return (self.jd - JD_J2000) + self.fr


def as_utc_datetime(instant: Instant) -> datetime:
    """Normalize an instant to an aware UTC datetime.

    Naive datetimes are taken as UTC. Numbers are UTC epoch milliseconds.
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)

    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise InputOutOfRange(
            "instant", instant, "expected a datetime or epoch milliseconds"
        )
    if not math.isfinite(instant):
        raise InputOutOfRange("instant", instant, "epoch milliseconds must be finite")
    try:
        return UNIX_EPOCH + timedelta(milliseconds=instant)
    except OverflowError as exc:
        raise InputOutOfRange(
            "instant", instant, "outside the representable date range"
        ) from exc


def datetime_to_jd(instant: Instant) -> JulianDate:
    """Convert an instant to a split Julian Date."""
    dt = as_utc_datetime(instant)
    seconds = dt.second + dt.microsecond / 1e6
    jd_val, fr_val = jday(
        dt.year, dt.month, dt.day, dt.hour, dt.minute, seconds
    )
    return JulianDate(jd=jd_val, fr=fr_val)


def julian_date(instant: Instant) -> float:
    """Julian Date of an instant (unixMillis / 86400000 + 2440587.5)."""
    if isinstance(instant, datetime):
        return datetime_to_jd(instant).full
    as_utc_datetime(instant)  # validates
    return instant / MILLIS_PER_DAY + JD_UNIX_EPOCH


def days_since_j2000(instant: Instant) -> float:
    return datetime_to_jd(instant).days_since_j2000


def julian_centuries(days: float) -> float:
    """Julian centuries since J2000.0 for a day offset."""
    return days / DAYS_PER_JULIAN_CENTURY


def _gmst_from_days(d, t):
    gmst = (
        GMST_AT_J2000
        + GMST_RATE_PER_DAY * d
        + GMST_T2 * t ** 2
        - t ** 3 / GMST_T3_DIVISOR
    )
    return gmst % 360.0


def gmst_degrees(instant: Instant) -> float:
    """Greenwich Mean Sidereal Time in degrees, in [0, 360)."""
    d = days_since_j2000(instant)
    gmst = float(_gmst_from_days(d, julian_centuries(d)))
    # A tiny negative input can round up to exactly 360.0
    return 0.0 if gmst >= 360.0 else gmst


def utc_midnight(instant: Instant) -> datetime:
    """Start of the instant's UTC calendar date."""
    dt = as_utc_datetime(instant)
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)
