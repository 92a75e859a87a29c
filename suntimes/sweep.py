"""Year-long sun position sweeps for chart rendering.

These loops sit on top of :func:`suntimes.position.solve_position` and are
what a chart layer runs; the solver itself stays per-instant.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Iterator, Optional

import numpy as np

from .errors import SunNeverRises, SunNeverSets
from .mathutil import UtcOffset, resolve_utc_offset
from .position import solve_position
from .types import GeoCoordinate, SolarPosition

__all__ = ["iter_year_positions", "altitude_grid", "daily_peak_altitudes", "MINUTES_PER_DAY"]

LOGGER = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440

StopHook = Callable[[], bool]


def _check_interval(interval_minutes: int) -> int:
    if (
        isinstance(interval_minutes, bool)
        or not isinstance(interval_minutes, int)
        or interval_minutes <= 0
        or MINUTES_PER_DAY % interval_minutes
    ):
        raise ValueError(
            f"interval_minutes must be a positive divisor of {MINUTES_PER_DAY}: {interval_minutes!r}"
        )
    return interval_minutes


def _days_of(year: int) -> Iterator[date]:
    current = date(year, 1, 1)
    while current.year == year:
        yield current
        current += timedelta(days=1)


def _day_instants(day: date, offset_seconds: int, interval_minutes: int) -> Iterator[datetime]:
    tz = timezone(timedelta(seconds=offset_seconds))
    midnight = datetime.combine(day, time(0, 0), tzinfo=tz)
    for minute in range(0, MINUTES_PER_DAY, interval_minutes):
        yield midnight + timedelta(minutes=minute)


def iter_year_positions(
    year: int,
    location: GeoCoordinate,
    utc_offset: UtcOffset,
    interval_minutes: int = 60,
    should_stop: Optional[StopHook] = None,
) -> Iterator[SolarPosition]:
    """Yield daylight sun positions for every local day of *year*.

    Samples with the sun below the horizon are left out. *should_stop* is
    polled once per day; returning true ends the sweep.
    """

    _check_interval(interval_minutes)
    for day in _days_of(year):
        if should_stop is not None and should_stop():
            LOGGER.debug(json.dumps({"event": "sweep_cancelled", "date": day.isoformat()}))
            return
        offset = resolve_utc_offset(utc_offset, day)
        for instant in _day_instants(day, offset, interval_minutes):
            try:
                yield solve_position(instant, location, daylight_only=True)
            except (SunNeverRises, SunNeverSets):
                continue


def altitude_grid(
    year: int,
    location: GeoCoordinate,
    utc_offset: UtcOffset,
    interval_minutes: int = 60,
    should_stop: Optional[StopHook] = None,
) -> np.ndarray:
    """Return altitudes as a ``(days, samples_per_day)`` array.

    Entries where the sun is below the horizon, or days not reached because
    the sweep was stopped, are NaN.
    """

    _check_interval(interval_minutes)
    days = list(_days_of(year))
    samples = MINUTES_PER_DAY // interval_minutes
    grid = np.full((len(days), samples), np.nan, dtype=np.float64)

    for row, day in enumerate(days):
        if should_stop is not None and should_stop():
            LOGGER.debug(json.dumps({"event": "sweep_cancelled", "date": day.isoformat()}))
            break
        offset = resolve_utc_offset(utc_offset, day)
        for column, instant in enumerate(_day_instants(day, offset, interval_minutes)):
            altitude = solve_position(instant, location).altitude
            if altitude > 0.0:
                grid[row, column] = altitude

    LOGGER.debug(
        json.dumps(
            {
                "event": "altitude_grid",
                "year": year,
                "shape": list(grid.shape),
                "daylight_samples": int(np.count_nonzero(~np.isnan(grid))),
            }
        )
    )
    return grid


def daily_peak_altitudes(grid: np.ndarray) -> np.ndarray:
    """Highest sampled altitude per day, NaN for days without daylight samples."""

    peaks = np.full(grid.shape[0], np.nan, dtype=np.float64)
    lit = ~np.all(np.isnan(grid), axis=1)
    if lit.any():
        peaks[lit] = np.nanmax(grid[lit], axis=1)
    return peaks
