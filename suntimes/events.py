"""Solar event times via the zenith-angle hour-angle method.

The constants follow the sunrise/sunset algorithm from the *Almanac for
Computers* (US Naval Observatory, 1990). All trigonometry is evaluated in
degrees; results are accurate to roughly a minute for non-polar latitudes.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime, time, timedelta, timezone

from .errors import EventNotFoundWithinYear, InvalidDate, SunNeverRises, SunNeverSets
from .mathutil import (
    UtcOffset,
    as_calendar_date,
    cos_deg,
    day_of_year,
    normalize_degrees,
    normalize_hours,
    resolve_utc_offset,
    sin_deg,
    tan_deg,
)
from .types import GeoCoordinate, Polarity, SolarEventKind

__all__ = ["solve_event", "next_event_after", "day_length", "SCAN_LIMIT_DAYS"]

LOGGER = logging.getLogger(__name__)

SCAN_LIMIT_DAYS = 365

_BASE_HOUR = {Polarity.dawn: 6.0, Polarity.dusk: 18.0, Polarity.noon: 12.0}


def _utc_decimal_hours(doy: int, event: SolarEventKind, location: GeoCoordinate) -> float:
    """Return the UTC time of *event* on day *doy* as decimal hours in [0, 24)."""

    lng_hour = location.longitude / 15.0
    approx_time = doy + (_BASE_HOUR[event.polarity] - lng_hour) / 24.0

    mean_anomaly = 0.9856 * approx_time - 3.289
    true_longitude = normalize_degrees(
        mean_anomaly
        + 1.916 * sin_deg(mean_anomaly)
        + 0.020 * sin_deg(2 * mean_anomaly)
        + 282.634
    )

    right_ascension = normalize_degrees(
        math.degrees(math.atan(0.91764 * tan_deg(true_longitude)))
    )
    # Put RA in the same quadrant as L.
    right_ascension += (
        math.floor(true_longitude / 90.0) * 90.0
        - math.floor(right_ascension / 90.0) * 90.0
    )
    right_ascension /= 15.0

    sin_dec = 0.39782 * sin_deg(true_longitude)
    cos_dec = math.cos(math.asin(sin_dec))

    cos_h = (cos_deg(event.zenith) - sin_dec * sin_deg(location.latitude)) / (
        cos_dec * cos_deg(location.latitude)
    )
    if cos_h > 1:
        raise SunNeverRises(
            f"{event.label} does not occur on day {doy} at latitude {location.latitude}: "
            "the sun never rises"
        )
    if cos_h < -1:
        raise SunNeverSets(
            f"{event.label} does not occur on day {doy} at latitude {location.latitude}: "
            "the sun never sets"
        )

    if event.polarity is Polarity.dawn:
        hour_angle = 360.0 - math.degrees(math.acos(cos_h))
    elif event.polarity is Polarity.dusk:
        hour_angle = math.degrees(math.acos(cos_h))
    else:
        hour_angle = 0.0
    hour_angle /= 15.0

    local_mean_time = hour_angle + right_ascension - 0.06571 * approx_time - 6.622
    return normalize_hours(local_mean_time - lng_hour)


def _combine(day: date, hours: float, offset_seconds: int) -> datetime:
    """Attach floor-truncated decimal *hours* to *day* in a fixed-offset zone."""

    hour = int(hours)
    minutes = (hours - hour) * 60.0
    minute = int(minutes)
    second = int((minutes - minute) * 60.0)
    tz = timezone(timedelta(seconds=offset_seconds))
    return datetime.combine(day, time(hour, minute, second), tzinfo=tz)


def solve_event(
    day: date,
    event: SolarEventKind,
    location: GeoCoordinate,
    utc_offset_seconds: int,
) -> datetime:
    """Compute the local time of *event* on the calendar date *day*.

    Parameters
    ----------
    day:
        Calendar date in the caller's local calendar. A ``datetime`` is reduced
        to its date.
    event:
        Solar event to compute.
    location:
        Observer position.
    utc_offset_seconds:
        UTC offset in effect for *day* at *location*.

    Returns
    -------
    datetime
        Timezone-aware datetime on *day* with a fixed ``utc_offset_seconds``
        offset, truncated to whole seconds.

    Raises
    ------
    SunNeverRises, SunNeverSets
        When the sun does not cross the event's zenith on that day.
    InvalidDate
        For malformed date or offset input.
    """

    local_day = as_calendar_date(day)
    offset = resolve_utc_offset(utc_offset_seconds, local_day)
    event = SolarEventKind(event)

    universal = _utc_decimal_hours(day_of_year(local_day), event, location)
    local = normalize_hours(universal + offset / 3600.0)
    return _combine(local_day, local, offset)


def next_event_after(
    instant: datetime,
    event: SolarEventKind,
    location: GeoCoordinate,
    utc_offset: UtcOffset,
) -> datetime:
    """Return the first occurrence of *event* strictly after *instant*.

    The scan starts on the day after *instant*'s calendar date and gives up
    after :data:`SCAN_LIMIT_DAYS` days. Days on which the event does not occur
    are skipped. *utc_offset* is a fixed offset in seconds or a callable that
    maps a local date to its offset.
    """

    if not isinstance(instant, datetime) or instant.tzinfo is None:
        raise InvalidDate("instant must be a timezone-aware datetime")
    event = SolarEventKind(event)

    start = instant.date()
    skipped = 0
    for step in range(1, SCAN_LIMIT_DAYS + 1):
        try:
            candidate_day = start + timedelta(days=step)
        except OverflowError as exc:
            raise InvalidDate(f"date out of range scanning from {start}") from exc
        offset = resolve_utc_offset(utc_offset, candidate_day)
        try:
            candidate = solve_event(candidate_day, event, location, offset)
        except (SunNeverRises, SunNeverSets) as exc:
            skipped += 1
            LOGGER.debug(
                json.dumps(
                    {
                        "event": "sun_event_skipped",
                        "kind": event.value,
                        "date": candidate_day.isoformat(),
                        "reason": exc.code,
                    }
                )
            )
            continue
        if candidate > instant:
            return candidate

    LOGGER.debug(
        json.dumps(
            {
                "event": "sun_event_scan_exhausted",
                "kind": event.value,
                "after": instant.isoformat(),
                "skipped_days": skipped,
            }
        )
    )
    raise EventNotFoundWithinYear(
        f"No {event.label.lower()} within {SCAN_LIMIT_DAYS} days after {instant.isoformat()}"
    )


def day_length(day: date, location: GeoCoordinate, utc_offset: UtcOffset) -> timedelta:
    """Time between sunrise and sunset on *day*."""

    local_day = as_calendar_date(day)
    offset = resolve_utc_offset(utc_offset, local_day)
    sunrise = solve_event(local_day, SolarEventKind.sunrise, location, offset)
    sunset = solve_event(local_day, SolarEventKind.sunset, location, offset)
    return sunset - sunrise
