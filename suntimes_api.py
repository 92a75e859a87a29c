"""FastAPI application exposing solar event and position computations."""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Optional

import numpy as np
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models import (
    AltitudesQueryParams,
    AltitudesResponse,
    DayLengthQueryParams,
    DayLengthResponse,
    ErrorResponse,
    EventQueryParams,
    EventResponse,
    HealthResponse,
    NextEventQueryParams,
    PositionQueryParams,
    PositionResponse,
)
from suntimes import (
    EventNotFoundWithinYear,
    GeoCoordinate,
    InvalidDate,
    SolarCalculationError,
    SolarEventKind,
    SunNeverRises,
    SunNeverSets,
    __version__,
    day_length,
    next_event_after,
    solve_event,
    solve_position,
)
from suntimes.settings import load_settings
from suntimes.sweep import altitude_grid, daily_peak_altitudes

SETTINGS = load_settings()

logging.basicConfig(level=SETTINGS.log_level, format="%(message)s")
LOGGER = logging.getLogger("suntimes-api")

APP_DESCRIPTION = "Sunrise, sunset, twilight and sun position calculations"


@asynccontextmanager
async def lifespan(app: FastAPI):
    LOGGER.info(
        json.dumps(
            {
                "event": "startup",
                "version": __version__,
                "log_level": SETTINGS.log_level,
                "sweep_interval_minutes": SETTINGS.sweep_interval_minutes,
            }
        )
    )
    yield


app = FastAPI(
    title="Suntimes API",
    description=APP_DESCRIPTION,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _log_request(name: str, start_time: float, **fields: object) -> None:
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps({"event": name, **fields, "duration_ms": round(duration_ms, 3)}, default=str)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(InvalidDate)
async def invalid_date_handler(request: Request, exc: InvalidDate) -> JSONResponse:
    return _error_response(400, exc.code, str(exc))


@app.exception_handler(EventNotFoundWithinYear)
async def event_not_found_handler(
    request: Request, exc: EventNotFoundWithinYear
) -> JSONResponse:
    return _error_response(404, exc.code, str(exc))


@app.exception_handler(SolarCalculationError)
async def solar_error_handler(request: Request, exc: SolarCalculationError) -> JSONResponse:
    return _error_response(422, exc.code, str(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, f"http_{exc.status_code}", str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        ok=True,
        version=__version__,
        events=[kind.value for kind in SolarEventKind],
    )


@app.get("/sun/event", response_model=EventResponse, responses=ERROR_RESPONSES)
def event_endpoint(params: Annotated[EventQueryParams, Query()]) -> EventResponse:
    start_time = time.perf_counter()
    location = GeoCoordinate(params.lat, params.lon)
    try:
        when: Optional[datetime] = solve_event(
            params.day, params.event, location, params.offset_seconds
        )
        status = "ok"
    except (SunNeverRises, SunNeverSets) as exc:
        when = None
        status = exc.code

    _log_request(
        "sun_event",
        start_time,
        lat=params.lat,
        lon=params.lon,
        date=params.day.isoformat(),
        kind=params.event.value,
        status=status,
    )
    return EventResponse(
        status=status,
        event=params.event,
        label=params.event.label,
        latitude=params.lat,
        longitude=params.lon,
        time=when.isoformat() if when is not None else None,
        time_utc=_format_utc(when),
    )


@app.get("/sun/next", response_model=EventResponse, responses=ERROR_RESPONSES)
def next_event_endpoint(params: Annotated[NextEventQueryParams, Query()]) -> EventResponse:
    start_time = time.perf_counter()
    location = GeoCoordinate(params.lat, params.lon)
    when = next_event_after(params.after, params.event, location, params.offset_seconds)

    _log_request(
        "sun_next",
        start_time,
        lat=params.lat,
        lon=params.lon,
        after=params.after.isoformat(),
        kind=params.event.value,
    )
    return EventResponse(
        status="ok",
        event=params.event,
        label=params.event.label,
        latitude=params.lat,
        longitude=params.lon,
        time=when.isoformat(),
        time_utc=_format_utc(when),
    )


@app.get("/sun/day-length", response_model=DayLengthResponse, responses=ERROR_RESPONSES)
def day_length_endpoint(params: Annotated[DayLengthQueryParams, Query()]) -> DayLengthResponse:
    start_time = time.perf_counter()
    location = GeoCoordinate(params.lat, params.lon)
    try:
        seconds: Optional[float] = day_length(
            params.day, location, params.offset_seconds
        ).total_seconds()
        status = "ok"
    except (SunNeverRises, SunNeverSets) as exc:
        seconds = None
        status = exc.code

    _log_request(
        "sun_day_length",
        start_time,
        lat=params.lat,
        lon=params.lon,
        date=params.day.isoformat(),
        status=status,
    )
    return DayLengthResponse(
        status=status,
        date_local=params.day,
        latitude=params.lat,
        longitude=params.lon,
        seconds=seconds,
    )


@app.get("/sun/position", response_model=PositionResponse, responses=ERROR_RESPONSES)
def position_endpoint(params: Annotated[PositionQueryParams, Query()]) -> PositionResponse:
    start_time = time.perf_counter()
    position = solve_position(params.at, GeoCoordinate(params.lat, params.lon))

    _log_request("sun_position", start_time, lat=params.lat, lon=params.lon, at=params.at.isoformat())
    return PositionResponse(
        time=position.instant.isoformat(),
        latitude=params.lat,
        longitude=params.lon,
        altitude=round(position.altitude, 6),
        azimuth=round(position.azimuth, 6),
    )


@app.get("/sun/altitudes", response_model=AltitudesResponse, responses=ERROR_RESPONSES)
def altitudes_endpoint(params: Annotated[AltitudesQueryParams, Query()]) -> AltitudesResponse:
    start_time = time.perf_counter()
    interval = params.interval_minutes or SETTINGS.sweep_interval_minutes
    grid = altitude_grid(
        params.year,
        GeoCoordinate(params.lat, params.lon),
        params.offset_seconds,
        interval_minutes=interval,
    )
    peaks = [
        None if np.isnan(value) else round(float(value), 4)
        for value in daily_peak_altitudes(grid)
    ]

    _log_request(
        "sun_altitudes",
        start_time,
        lat=params.lat,
        lon=params.lon,
        year=params.year,
        interval_minutes=interval,
    )
    return AltitudesResponse(
        year=params.year,
        latitude=params.lat,
        longitude=params.lon,
        interval_minutes=interval,
        peak_altitudes=peaks,
    )
