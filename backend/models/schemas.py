"""Pydantic schemas for API responses."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from core.coordinate_transforms import GeographicPoint, HorizonPosition
from core.sampling import CelestialSnapshot
from core.sun_times import RiseSetResult
from core.terminator import TerminatorCurve


# --- Enums ---


class BodyName(str, enum.Enum):
    SUN = "sun"
    MOON = "moon"


class DaylightConditionName(str, enum.Enum):
    NORMAL = "normal"
    POLAR_DAY = "polar_day"
    POLAR_NIGHT = "polar_night"


# --- Points ---


class GeoPointResponse(BaseModel):
    latitude: float
    longitude: float

    @classmethod
    def from_point(cls, point: GeographicPoint) -> GeoPointResponse:
        return cls(latitude=point.latitude, longitude=point.longitude)


class SubPointResponse(BaseModel):
    body: BodyName
    datetime_utc: datetime
    point: GeoPointResponse


# --- Horizon ---


class HorizonResponse(BaseModel):
    body: BodyName
    datetime_utc: datetime
    observer: GeoPointResponse
    altitude_deg: float
    azimuth_deg: float
    above_horizon: bool
    refraction: bool = False

    @classmethod
    def build(
        cls,
        body: BodyName,
        when: datetime,
        observer: GeographicPoint,
        position: HorizonPosition,
        refraction: bool,
    ) -> HorizonResponse:
        return cls(
            body=body,
            datetime_utc=when,
            observer=GeoPointResponse.from_point(observer),
            altitude_deg=position.altitude,
            azimuth_deg=position.azimuth,
            above_horizon=position.altitude > 0.0,
            refraction=refraction,
        )


# --- Sunrise / Sunset ---


class RiseSetResponse(BaseModel):
    condition: DaylightConditionName
    sunrise_utc: Optional[datetime] = None
    sunset_utc: Optional[datetime] = None
    day_length_hours: float
    polar_day: bool = False
    polar_night: bool = False

    @classmethod
    def from_result(cls, result: RiseSetResult) -> RiseSetResponse:
        return cls(
            condition=DaylightConditionName(result.condition.value),
            sunrise_utc=result.sunrise,
            sunset_utc=result.sunset,
            day_length_hours=result.day_length.total_seconds() / 3600.0,
            polar_day=result.polar_day,
            polar_night=result.polar_night,
        )


# --- Terminator ---


class TerminatorResponse(BaseModel):
    datetime_utc: datetime
    step_deg: float
    subsolar: GeoPointResponse
    points: list[GeoPointResponse] = Field(default_factory=list)
    segments: list[list[GeoPointResponse]] = Field(default_factory=list)

    @classmethod
    def from_curve(cls, curve: TerminatorCurve) -> TerminatorResponse:
        return cls(
            datetime_utc=curve.instant,
            step_deg=curve.step_degrees,
            subsolar=GeoPointResponse.from_point(curve.subsolar),
            points=[GeoPointResponse.from_point(p) for p in curve.points],
            segments=[
                [GeoPointResponse.from_point(p) for p in segment]
                for segment in curve.segments()
            ],
        )


# --- Snapshot ---


class ObserverSkyResponse(BaseModel):
    observer: GeoPointResponse
    sun: HorizonResponse
    moon: HorizonResponse
    sun_times: RiseSetResponse


class SnapshotResponse(BaseModel):
    datetime_utc: datetime
    subsolar: GeoPointResponse
    sublunar: GeoPointResponse
    terminator: TerminatorResponse
    observer_sky: Optional[ObserverSkyResponse] = None

    @classmethod
    def from_snapshot(
        cls, snapshot: CelestialSnapshot, refraction: bool = False
    ) -> SnapshotResponse:
        observer_sky = None
        sky = snapshot.observer_sky
        if sky is not None:
            observer_sky = ObserverSkyResponse(
                observer=GeoPointResponse.from_point(sky.observer),
                sun=HorizonResponse.build(
                    BodyName.SUN, snapshot.instant, sky.observer, sky.sun, refraction
                ),
                moon=HorizonResponse.build(
                    BodyName.MOON, snapshot.instant, sky.observer, sky.moon, refraction
                ),
                sun_times=RiseSetResponse.from_result(sky.sun_times),
            )
        return cls(
            datetime_utc=snapshot.instant,
            subsolar=GeoPointResponse.from_point(snapshot.subsolar),
            sublunar=GeoPointResponse.from_point(snapshot.sublunar),
            terminator=TerminatorResponse.from_curve(snapshot.terminator),
            observer_sky=observer_sky,
        )
