from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from suntimes import GeoCoordinate, InvalidDate, SolarEventKind, SunNeverRises, solve_event
from suntimes.countdown import countdown_progress, format_remaining, resolve_target

ZAGREB = GeoCoordinate(45.8150, 15.9819)
CEST = timezone(timedelta(hours=2))


def test_resolve_target_uses_todays_event_when_ahead():
    now = datetime(2024, 6, 21, 3, 0, tzinfo=CEST)
    target = resolve_target(SolarEventKind.sunrise, ZAGREB, 7200, now)
    assert target == solve_event(date(2024, 6, 21), SolarEventKind.sunrise, ZAGREB, 7200)


def test_resolve_target_rolls_over_when_event_passed():
    now = datetime(2024, 6, 21, 12, 0, tzinfo=CEST)
    target = resolve_target(SolarEventKind.sunrise, ZAGREB, 7200, now)
    assert target.date() == date(2024, 6, 22)
    assert target > now


def test_resolve_target_for_selected_future_day():
    now = datetime(2024, 6, 21, 12, 0, tzinfo=CEST)
    target = resolve_target(
        SolarEventKind.sunset, ZAGREB, 7200, now, day=date(2024, 7, 4)
    )
    assert target.date() == date(2024, 7, 4)


def test_resolve_target_propagates_polar_error():
    now = datetime(2024, 12, 21, 9, 0, tzinfo=timezone(timedelta(hours=1)))
    with pytest.raises(SunNeverRises):
        resolve_target(SolarEventKind.sunrise, GeoCoordinate(70.0, 20.0), 3600, now)


def test_resolve_target_requires_aware_now():
    with pytest.raises(InvalidDate):
        resolve_target(SolarEventKind.sunrise, ZAGREB, 7200, datetime(2024, 6, 21, 3, 0))


def test_countdown_progress_clamped():
    start = datetime(2024, 6, 21, 0, 0, tzinfo=CEST)
    target = start + timedelta(hours=4)
    assert countdown_progress(start, target, start + timedelta(hours=1)) == pytest.approx(0.25)
    assert countdown_progress(start, target, start - timedelta(hours=1)) == 0.0
    assert countdown_progress(start, target, target + timedelta(hours=1)) == 1.0
    assert countdown_progress(target, start, target) == 1.0


@pytest.mark.parametrize(
    "interval, expected",
    [
        (timedelta(days=1, hours=2, minutes=3, seconds=4, milliseconds=500), "1d 2h 3m 02:03:04.500"),
        (timedelta(minutes=5, seconds=1), "5m 00:05:01.000"),
        (timedelta(seconds=5, milliseconds=250), "00:00:05.250"),
        (timedelta(days=2), "2d 00:00:00.000"),
        (timedelta(seconds=-30), "00:00:00.000"),
    ],
)
def test_format_remaining(interval: timedelta, expected: str):
    assert format_remaining(interval) == expected
