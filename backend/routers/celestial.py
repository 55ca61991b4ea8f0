"""Celestial position and terminator API routes."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from backend.models.schemas import (
    BodyName,
    GeoPointResponse,
    HorizonResponse,
    RiseSetResponse,
    SnapshotResponse,
    SubPointResponse,
    TerminatorResponse,
)
from core.celestial import horizon_position, sublunar_point, subsolar_point
from core.coordinate_transforms import GeographicPoint
from core.errors import DomainViolation, InputOutOfRange
from core.sampling import compute_snapshot
from core.sun_times import rise_set
from core.terminator import terminator_curve, validate_step
from utils.constants import DEFAULT_TERMINATOR_STEP_DEG

logger = logging.getLogger(__name__)
router = APIRouter()


def configured_step() -> float:
    """Default terminator step from WORLDCLOCK_TERMINATOR_STEP, if valid."""
    raw = os.environ.get("WORLDCLOCK_TERMINATOR_STEP")
    if raw is None:
        return DEFAULT_TERMINATOR_STEP_DEG
    try:
        return validate_step(float(raw))
    except ValueError as e:
        logger.warning(
            "Ignoring WORLDCLOCK_TERMINATOR_STEP=%r (%s); using %g",
            raw, e, DEFAULT_TERMINATOR_STEP_DEG,
        )
        return DEFAULT_TERMINATOR_STEP_DEG


DEFAULT_STEP = configured_step()


def _resolve_instant(at: Optional[datetime]) -> datetime:
    if at is None:
        return datetime.now(timezone.utc)
    if at.tzinfo is None:
        return at.replace(tzinfo=timezone.utc)
    return at.astimezone(timezone.utc)


def _observer(lat: float, lon: float) -> GeographicPoint:
    try:
        return GeographicPoint(latitude=lat, longitude=lon)
    except InputOutOfRange as e:
        raise HTTPException(status_code=422, detail=str(e))


def _compute(label: str, fn, *args, **kwargs):
    """Run an engine query, mapping engine errors onto HTTP errors."""
    try:
        return fn(*args, **kwargs)
    except InputOutOfRange as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DomainViolation as e:
        logger.error("%s failed: %s", label, e)
        raise HTTPException(status_code=500, detail=f"{label} failed: {e}")


@router.get("/subsolar", response_model=SubPointResponse)
def subsolar(at: Optional[datetime] = Query(default=None, description="UTC instant, default now")):
    """Point on Earth where the Sun is directly overhead."""
    when = _resolve_instant(at)
    point = _compute("Sub-solar point", subsolar_point, when)
    return SubPointResponse(
        body=BodyName.SUN, datetime_utc=when, point=GeoPointResponse.from_point(point)
    )


@router.get("/sublunar", response_model=SubPointResponse)
def sublunar(at: Optional[datetime] = Query(default=None, description="UTC instant, default now")):
    """Point on Earth where the Moon is directly overhead."""
    when = _resolve_instant(at)
    point = _compute("Sub-lunar point", sublunar_point, when)
    return SubPointResponse(
        body=BodyName.MOON, datetime_utc=when, point=GeoPointResponse.from_point(point)
    )


@router.get("/horizon", response_model=HorizonResponse)
def horizon(
    body: BodyName = Query(default=BodyName.SUN),
    lat: float = Query(..., description="Observer latitude in degrees"),
    lon: float = Query(..., description="Observer longitude in degrees"),
    at: Optional[datetime] = Query(default=None),
    refraction: bool = Query(default=False, description="Apply atmospheric refraction"),
):
    """Altitude and azimuth of the Sun or Moon for an observer."""
    when = _resolve_instant(at)
    observer = _observer(lat, lon)
    position = _compute(
        "Horizon position", horizon_position, body.value, when, observer,
        refraction=refraction,
    )
    return HorizonResponse.build(body, when, observer, position, refraction)


@router.get("/sun-times", response_model=RiseSetResponse)
def sun_times(
    lat: float = Query(..., description="Observer latitude in degrees"),
    lon: float = Query(..., description="Observer longitude in degrees"),
    at: Optional[datetime] = Query(default=None),
):
    """Sunrise and sunset for the UTC date of the instant."""
    when = _resolve_instant(at)
    observer = _observer(lat, lon)
    result = _compute("Sunrise/sunset", rise_set, when, observer)
    return RiseSetResponse.from_result(result)


@router.get("/terminator", response_model=TerminatorResponse)
def terminator(
    at: Optional[datetime] = Query(default=None),
    step: float = Query(default=DEFAULT_STEP, description="Latitude step in degrees"),
):
    """Day/night boundary polyline."""
    when = _resolve_instant(at)
    curve = _compute("Terminator", terminator_curve, when, step)
    return TerminatorResponse.from_curve(curve)


@router.get("/snapshot", response_model=SnapshotResponse)
def snapshot(
    at: Optional[datetime] = Query(default=None),
    lat: Optional[float] = Query(default=None),
    lon: Optional[float] = Query(default=None),
    step: float = Query(default=DEFAULT_STEP),
    refraction: bool = Query(default=False),
):
    """Every overlay value for one instant, for clients polling on a cadence."""
    if (lat is None) != (lon is None):
        raise HTTPException(status_code=422, detail="lat and lon must be given together")

    when = _resolve_instant(at)
    observer = _observer(lat, lon) if lat is not None else None
    result = _compute(
        "Snapshot", compute_snapshot, when, observer,
        terminator_step=step, refraction=refraction,
    )
    return SnapshotResponse.from_snapshot(result, refraction=refraction)
