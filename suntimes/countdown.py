"""Countdown helpers: pick the next target event and describe time left."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from .errors import InvalidDate
from .events import next_event_after, solve_event
from .mathutil import UtcOffset, as_calendar_date, resolve_utc_offset
from .types import GeoCoordinate, SolarEventKind

__all__ = ["resolve_target", "countdown_progress", "format_remaining"]


def resolve_target(
    event: SolarEventKind,
    location: GeoCoordinate,
    utc_offset: UtcOffset,
    now: datetime,
    day: Optional[date] = None,
) -> datetime:
    """Return the event time to count down to.

    The event on *day* (defaults to the calendar date of *now*) is used when it
    is still ahead; otherwise the next occurrence after *now*.
    """

    if not isinstance(now, datetime) or now.tzinfo is None:
        raise InvalidDate("now must be a timezone-aware datetime")
    local_day = as_calendar_date(day if day is not None else now)
    offset = resolve_utc_offset(utc_offset, local_day)
    target = solve_event(local_day, event, location, offset)
    if target > now:
        return target
    return next_event_after(now, event, location, utc_offset)


def countdown_progress(start: datetime, target: datetime, now: datetime) -> float:
    """Fraction of the span from *start* to *target* elapsed at *now*, in [0, 1]."""

    total = (target - start).total_seconds()
    if total <= 0:
        return 1.0
    elapsed = (now - start).total_seconds() / total
    return min(max(elapsed, 0.0), 1.0)


def format_remaining(interval: timedelta) -> str:
    """Format a remaining interval like ``"1d 2h 3m 02:03:04.500"``.

    Leading day/hour/minute components appear only when non-zero.
    """

    total = max(interval.total_seconds(), 0.0)
    whole = int(total)
    milliseconds = int((total - whole) * 1000)
    seconds = whole % 60
    minutes = (whole // 60) % 60
    hours = (whole // 3600) % 24
    days = whole // 86400

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    clock = f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"
    if parts:
        return " ".join(parts) + " " + clock
    return clock
