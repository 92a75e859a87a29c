"""Sunrise, sunset, twilight and sun position calculations."""

from .errors import (
    EventNotFoundWithinYear,
    InvalidDate,
    SolarCalculationError,
    SunNeverRises,
    SunNeverSets,
)
from .events import day_length, next_event_after, solve_event
from .position import solve_position
from .types import GeoCoordinate, SolarEventKind, SolarPosition

__version__ = "1.0.0"

__all__ = [
    "GeoCoordinate",
    "SolarEventKind",
    "SolarPosition",
    "solve_event",
    "next_event_after",
    "day_length",
    "solve_position",
    "SolarCalculationError",
    "SunNeverRises",
    "SunNeverSets",
    "InvalidDate",
    "EventNotFoundWithinYear",
]
