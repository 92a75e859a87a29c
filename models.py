"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from suntimes.mathutil import MAX_UTC_OFFSET_SECONDS
from suntimes.types import SolarEventKind


class LocationParams(BaseModel):
    """Latitude/longitude shared by every ``/sun`` query."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")


class OffsetParams(LocationParams):
    """Location plus the UTC offset the caller has in effect."""

    offset_seconds: int = Field(0, description="UTC offset in seconds")

    @field_validator("offset_seconds")
    @classmethod
    def validate_offset_seconds(cls, value: int) -> int:
        if abs(value) >= MAX_UTC_OFFSET_SECONDS:
            raise ValueError("offset_seconds must be within ±18 hours")
        return value


class EventQueryParams(OffsetParams):
    """Validated query parameters for the ``/sun/event`` endpoint."""

    day: date = Field(..., alias="date", description="Local calendar date (YYYY-MM-DD)")
    event: SolarEventKind = Field(SolarEventKind.sunrise, description="Solar event")


class NextEventQueryParams(OffsetParams):
    """Validated query parameters for the ``/sun/next`` endpoint."""

    after: datetime = Field(..., description="Timezone-aware ISO-8601 instant")
    event: SolarEventKind = Field(SolarEventKind.sunrise, description="Solar event")


class DayLengthQueryParams(OffsetParams):
    """Validated query parameters for the ``/sun/day-length`` endpoint."""

    day: date = Field(..., alias="date", description="Local calendar date (YYYY-MM-DD)")


class PositionQueryParams(LocationParams):
    """Validated query parameters for the ``/sun/position`` endpoint."""

    at: datetime = Field(..., description="Timezone-aware ISO-8601 instant")


class AltitudesQueryParams(OffsetParams):
    """Validated query parameters for the ``/sun/altitudes`` endpoint."""

    year: int = Field(..., ge=1, le=9998, description="Calendar year")
    interval_minutes: Optional[int] = Field(
        None, ge=1, le=1440, description="Sampling step; defaults to the configured interval"
    )

    @field_validator("interval_minutes")
    @classmethod
    def validate_interval(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and 1440 % value:
            raise ValueError("interval_minutes must divide 1440")
        return value


class EventResponse(BaseModel):
    """Solar event payload; ``time`` is null when the event does not occur."""

    ok: bool = True
    status: str = Field(..., description="ok, sun_never_rises or sun_never_sets")
    event: SolarEventKind
    label: str
    latitude: float
    longitude: float
    time: Optional[str] = Field(None, description="Event time (ISO-8601, local offset)")
    time_utc: Optional[str] = Field(None, description="Event time in UTC (ISO-8601)")


class DayLengthResponse(BaseModel):
    ok: bool = True
    status: str
    date_local: date
    latitude: float
    longitude: float
    seconds: Optional[float] = Field(None, description="Sunset minus sunrise")


class PositionResponse(BaseModel):
    ok: bool = True
    time: str
    latitude: float
    longitude: float
    altitude: float = Field(..., description="Degrees above the horizon")
    azimuth: float = Field(..., description="Degrees clockwise from north")


class AltitudesResponse(BaseModel):
    """Daily peak altitude series for charting."""

    ok: bool = True
    year: int
    latitude: float
    longitude: float
    interval_minutes: int
    peak_altitudes: List[Optional[float]] = Field(
        ..., description="Highest sampled altitude per day, null without daylight"
    )


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    version: str
    events: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
