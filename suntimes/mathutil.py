"""Angle, hour and calendar helpers used by both solvers."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Callable, Union

from .errors import InvalidDate

__all__ = [
    "OffsetResolver",
    "UtcOffset",
    "MAX_UTC_OFFSET_SECONDS",
    "sin_deg",
    "cos_deg",
    "tan_deg",
    "normalize_degrees",
    "normalize_hours",
    "day_of_year",
    "resolve_utc_offset",
    "as_calendar_date",
]

OffsetResolver = Callable[[date], int]
UtcOffset = Union[int, OffsetResolver]

MAX_UTC_OFFSET_SECONDS = 18 * 3600  # real-world offsets stay within -12h..+14h


def sin_deg(angle: float) -> float:
    return math.sin(math.radians(angle))


def cos_deg(angle: float) -> float:
    return math.cos(math.radians(angle))


def tan_deg(angle: float) -> float:
    return math.tan(math.radians(angle))


def _wrap(value: float, period: float) -> float:
    wrapped = value % period
    # A tiny negative input rounds up to exactly ``period``.
    if wrapped >= period:
        wrapped -= period
    return wrapped


def normalize_degrees(angle: float) -> float:
    """Wrap *angle* into [0, 360)."""
    return _wrap(angle, 360.0)


def normalize_hours(hours: float) -> float:
    """Wrap *hours* into [0, 24)."""
    return _wrap(hours, 24.0)


def day_of_year(day: date) -> int:
    """Ordinal day within the year, 1..366."""
    if not isinstance(day, date):
        raise InvalidDate(f"expected a calendar date, got {type(day).__name__}")
    return day.timetuple().tm_yday


def resolve_utc_offset(utc_offset: UtcOffset, day: date) -> int:
    """Return the UTC offset in seconds in effect on *day*.

    *utc_offset* is either a fixed number of seconds or a resolver called with
    the local calendar date.
    """

    seconds = utc_offset(day) if callable(utc_offset) else utc_offset
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidDate(f"UTC offset must be a number of seconds, got {seconds!r}")
    if math.isnan(seconds) or abs(seconds) >= MAX_UTC_OFFSET_SECONDS:
        raise InvalidDate(f"UTC offset out of range: {seconds}")
    return int(seconds)


def as_calendar_date(value: date) -> date:
    """Reduce a date or datetime to a plain calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidDate(f"expected a calendar date, got {type(value).__name__}")
