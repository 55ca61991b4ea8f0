"""Day/night terminator sampling.

For each sampled parallel the boundary longitude is

    lon = subsolar_lon + acos(-tan(lat) * tan(subsolar_lat))

Parallels the boundary does not reach on this date (the acos argument
leaves [-1, 1], i.e. inside the polar day or polar night cap) are
skipped, never emitted as NaN.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from core.celestial import subsolar_point
from core.coordinate_transforms import (
    GeographicPoint,
    finite_number,
    normalize_longitude,
    unwrap_longitudes,
)
from core.errors import DegenerateGeometry, InputOutOfRange
from utils.constants import DEFAULT_TERMINATOR_STEP_DEG, DEG_TO_RAD, RAD_TO_DEG
from utils.time_utils import Instant, as_utc_datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TerminatorCurve:
    """Day/night boundary at one instant, ordered by ascending latitude."""

    instant: datetime
    step_degrees: float
    subsolar: GeographicPoint
    points: tuple[GeographicPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def latitudes(self) -> np.ndarray:
        return np.array([p.latitude for p in self.points], dtype=np.float64)

    def longitudes(self) -> np.ndarray:
        return np.array([p.longitude for p in self.points], dtype=np.float64)

    def unwrapped_longitudes(self) -> np.ndarray:
        """Longitudes without +/-360 jumps, for drawing one continuous line."""
        return unwrap_longitudes(self.longitudes())

    def segments(self) -> list[tuple[GeographicPoint, ...]]:
        """Split the polyline wherever it crosses the +/-180 seam."""
        if not self.points:
            return []
        segments = []
        current = [self.points[0]]
        for prev, point in zip(self.points, self.points[1:]):
            if abs(point.longitude - prev.longitude) > 180.0:
                segments.append(tuple(current))
                current = []
            current.append(point)
        segments.append(tuple(current))
        return segments


def validate_step(step_degrees) -> float:
    """Latitude step as a float in (0, 180]."""
    step = finite_number("step_degrees", step_degrees)
    if step <= 0.0 or step > 180.0:
        raise InputOutOfRange("step_degrees", step, "must be within (0, 180]")
    return step


def sample_latitudes(step_degrees: float) -> np.ndarray:
    """Latitudes from -90 to +90 inclusive; the last sample is pinned to +90."""
    step = validate_step(step_degrees)
    n_steps = int(math.floor(180.0 / step + 1e-9))
    lats = np.minimum(-90.0 + step * np.arange(n_steps + 1, dtype=np.float64), 90.0)
    if lats[-1] < 90.0 - 1e-9:
        lats = np.append(lats, 90.0)
    return lats


def terminator_longitude(latitude: float, subsolar: GeographicPoint) -> float:
    """Boundary longitude on one parallel.

    Raises:
        DegenerateGeometry: if the terminator does not reach this latitude.
    """
    if not -90.0 <= latitude <= 90.0:
        raise InputOutOfRange("latitude", latitude, "must be within [-90, 90]")
    cos_h = -math.tan(latitude * DEG_TO_RAD) * math.tan(subsolar.latitude * DEG_TO_RAD)
    if not -1.0 <= cos_h <= 1.0:
        raise DegenerateGeometry(latitude, subsolar.latitude)
    hour_angle = math.acos(cos_h) * RAD_TO_DEG
    return normalize_longitude(subsolar.longitude + hour_angle)


def terminator_curve(
    instant: Instant,
    step_degrees: float = DEFAULT_TERMINATOR_STEP_DEG,
) -> TerminatorCurve:
    """Sample the day/night boundary from the south to the north pole.

    Args:
        instant: aware datetime or UTC epoch milliseconds.
        step_degrees: latitude spacing between samples.

    Returns:
        TerminatorCurve with one point per reachable sampled latitude.
    """
    step = validate_step(step_degrees)
    lats = sample_latitudes(step)
    subsolar = subsolar_point(instant)

    cos_h = -np.tan(lats * DEG_TO_RAD) * math.tan(subsolar.latitude * DEG_TO_RAD)
    reachable = np.abs(cos_h) <= 1.0
    hour_angles = np.arccos(cos_h[reachable]) * RAD_TO_DEG

    skipped = int(lats.size - np.count_nonzero(reachable))
    if skipped:
        logger.debug(
            "Terminator skips %d of %d parallels (sub-solar latitude %.3f)",
            skipped, lats.size, subsolar.latitude,
        )

    points = tuple(
        GeographicPoint.from_unbounded(float(lat), subsolar.longitude + float(h))
        for lat, h in zip(lats[reachable], hour_angles)
    )
    return TerminatorCurve(
        instant=as_utc_datetime(instant),
        step_degrees=step,
        subsolar=subsolar,
        points=points,
    )
