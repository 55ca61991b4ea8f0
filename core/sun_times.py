"""Sunrise and sunset instants for an observer, with polar day/night.

Uses the sunrise equation cos H = -tan(lat) * tan(dec) with the solar
declination at the queried instant. The resulting UTC hours are laid on
the instant's UTC calendar date and may roll into the neighbouring date.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from core.coordinate_transforms import GeographicPoint, checked_acos
from core.ephemeris import sun_equatorial
from core.errors import InputOutOfRange
from utils.constants import DEG_TO_RAD, HOURS_PER_DEGREE, RAD_TO_DEG
from utils.time_utils import Instant, utc_midnight

logger = logging.getLogger(__name__)


class DaylightCondition(str, enum.Enum):
    NORMAL = "normal"
    POLAR_DAY = "polar_day"
    POLAR_NIGHT = "polar_night"


@dataclass(frozen=True, slots=True)
class RiseSetResult:
    """Either a sunrise/sunset pair or a polar condition, never a mix."""

    condition: DaylightCondition
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None

    def __post_init__(self):
        has_times = self.sunrise is not None and self.sunset is not None
        no_times = self.sunrise is None and self.sunset is None
        if self.condition is DaylightCondition.NORMAL and not has_times:
            raise ValueError("NORMAL result requires both sunrise and sunset")
        if self.condition is not DaylightCondition.NORMAL and not no_times:
            raise ValueError(f"{self.condition.value} result cannot carry times")

    @classmethod
    def polar_day_result(cls) -> RiseSetResult:
        return cls(condition=DaylightCondition.POLAR_DAY)

    @classmethod
    def polar_night_result(cls) -> RiseSetResult:
        return cls(condition=DaylightCondition.POLAR_NIGHT)

    @property
    def polar_day(self) -> bool:
        return self.condition is DaylightCondition.POLAR_DAY

    @property
    def polar_night(self) -> bool:
        return self.condition is DaylightCondition.POLAR_NIGHT

    @property
    def day_length(self) -> timedelta:
        if self.condition is DaylightCondition.NORMAL:
            return self.sunset - self.sunrise
        if self.polar_day:
            return timedelta(hours=24)
        return timedelta(0)


def sunrise_cosine(latitude_deg: float, declination_deg: float) -> float:
    """-tan(lat) * tan(dec). At +/-90 latitude tan() is huge but finite."""
    return -math.tan(latitude_deg * DEG_TO_RAD) * math.tan(declination_deg * DEG_TO_RAD)


def rise_set(instant: Instant, observer: GeographicPoint) -> RiseSetResult:
    """Sunrise and sunset for the instant's UTC date at the observer.

    Returns:
        RiseSetResult with NORMAL and both instants, or POLAR_DAY /
        POLAR_NIGHT with none.
    """
    if not isinstance(observer, GeographicPoint):
        raise InputOutOfRange("observer", observer, "expected a GeographicPoint")

    declination = sun_equatorial(instant).declination
    cos_h = sunrise_cosine(observer.latitude, declination)

    if cos_h < -1.0:
        logger.debug("Polar day at %s (cos H = %.3f)", observer, cos_h)
        return RiseSetResult.polar_day_result()
    if cos_h > 1.0:
        logger.debug("Polar night at %s (cos H = %.3f)", observer, cos_h)
        return RiseSetResult.polar_night_result()

    h = checked_acos(cos_h, "sunrise hour angle cosine") * RAD_TO_DEG
    lon_hours = observer.longitude * HOURS_PER_DEGREE
    sunrise_hour = 12.0 - h * HOURS_PER_DEGREE - lon_hours
    sunset_hour = 12.0 + h * HOURS_PER_DEGREE - lon_hours

    midnight = utc_midnight(instant)
    return RiseSetResult(
        condition=DaylightCondition.NORMAL,
        sunrise=midnight + timedelta(hours=sunrise_hour),
        sunset=midnight + timedelta(hours=sunset_hour),
    )
