"""Error taxonomy for solar event and position calculations."""

from __future__ import annotations

__all__ = [
    "SolarCalculationError",
    "SunNeverRises",
    "SunNeverSets",
    "InvalidDate",
    "EventNotFoundWithinYear",
]


class SolarCalculationError(RuntimeError):
    """Base class for every outcome a solver reports instead of a value."""

    code = "solar_calculation_error"


class SunNeverRises(SolarCalculationError):
    """The sun stays below the event's zenith for the whole day."""

    code = "sun_never_rises"


class SunNeverSets(SolarCalculationError):
    """The sun stays above the event's zenith for the whole day."""

    code = "sun_never_sets"


class InvalidDate(SolarCalculationError, ValueError):
    """Malformed calendar input, a naive datetime or an impossible offset."""

    code = "invalid_date"


class EventNotFoundWithinYear(SolarCalculationError):
    """A forward scan found no occurrence of the event within 365 days."""

    code = "event_not_found_within_year"
