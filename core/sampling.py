"""Snapshot queries for callers that re-evaluate on a fixed cadence.

The engine owns no timers. A caller's loop (a UI refresh, a server tick)
asks for one CelestialSnapshot per tick; sample_instants() only yields
the schedule and never sleeps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterator, Optional

from core.celestial import horizon_position, sublunar_point
from core.coordinate_transforms import GeographicPoint, HorizonPosition
from core.ephemeris import Body
from core.errors import InputOutOfRange
from core.sun_times import RiseSetResult, rise_set
from core.terminator import TerminatorCurve, terminator_curve
from utils.constants import (
    DEFAULT_TERMINATOR_STEP_DEG,
    MAX_SAMPLING_CADENCE_SECONDS,
    MIN_SAMPLING_CADENCE_SECONDS,
)
from utils.time_utils import Instant, as_utc_datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ObserverSky:
    """Everything an observer-centred panel shows for one instant."""

    observer: GeographicPoint
    sun: HorizonPosition
    moon: HorizonPosition
    sun_times: RiseSetResult


@dataclass(frozen=True, slots=True)
class CelestialSnapshot:
    """All map overlay data for one instant."""

    instant: datetime
    subsolar: GeographicPoint
    sublunar: GeographicPoint
    terminator: TerminatorCurve
    observer_sky: Optional[ObserverSky] = None


def compute_snapshot(
    instant: Instant,
    observer: Optional[GeographicPoint] = None,
    terminator_step: float = DEFAULT_TERMINATOR_STEP_DEG,
    refraction: bool = False,
) -> CelestialSnapshot:
    """Evaluate every query for a single instant."""
    when = as_utc_datetime(instant)
    terminator = terminator_curve(when, terminator_step)

    observer_sky = None
    if observer is not None:
        observer_sky = ObserverSky(
            observer=observer,
            sun=horizon_position(Body.SUN, when, observer, refraction=refraction),
            moon=horizon_position(Body.MOON, when, observer, refraction=refraction),
            sun_times=rise_set(when, observer),
        )

    logger.debug(
        "Snapshot %s: %d terminator points, observer=%s",
        when.isoformat(), len(terminator), observer,
    )
    return CelestialSnapshot(
        instant=when,
        subsolar=terminator.subsolar,
        sublunar=sublunar_point(when),
        terminator=terminator,
        observer_sky=observer_sky,
    )


def validate_cadence(cadence: timedelta) -> timedelta:
    if not isinstance(cadence, timedelta):
        raise InputOutOfRange("cadence", cadence, "expected a timedelta")
    seconds = cadence.total_seconds()
    if not MIN_SAMPLING_CADENCE_SECONDS <= seconds <= MAX_SAMPLING_CADENCE_SECONDS:
        raise InputOutOfRange(
            "cadence",
            cadence,
            f"must be between {MIN_SAMPLING_CADENCE_SECONDS:g}s "
            f"and {MAX_SAMPLING_CADENCE_SECONDS:g}s",
        )
    return cadence


def sample_instants(
    start: Instant,
    cadence: timedelta,
    count: Optional[int] = None,
) -> Iterator[datetime]:
    """Instants start, start + cadence, ... (endless when count is None).

    Arguments are checked eagerly, before the first instant is drawn.
    """
    validate_cadence(cadence)
    if count is not None and count < 0:
        raise InputOutOfRange("count", count, "must not be negative")
    return _iter_instants(as_utc_datetime(start), cadence, count)


def _iter_instants(
    current: datetime, cadence: timedelta, count: Optional[int]
) -> Iterator[datetime]:
    emitted = 0
    while count is None or emitted < count:
        yield current
        current += cadence
        emitted += 1
