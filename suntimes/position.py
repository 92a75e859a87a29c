"""Instantaneous sun altitude and azimuth (NOAA general solar position)."""

from __future__ import annotations

import math
from datetime import datetime

from .errors import InvalidDate, SunNeverRises, SunNeverSets
from .mathutil import day_of_year, normalize_degrees
from .types import GeoCoordinate, SolarPosition

__all__ = ["solve_position", "equation_of_time", "declination"]


def equation_of_time(gamma: float) -> float:
    """Equation of time in minutes for fractional year *gamma* (radians)."""
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )


def declination(gamma: float) -> float:
    """Solar declination in radians for fractional year *gamma* (radians)."""
    return (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.00148 * math.sin(3 * gamma)
    )


def solve_position(
    instant: datetime,
    location: GeoCoordinate,
    *,
    daylight_only: bool = False,
) -> SolarPosition:
    """Compute where the sun stands at *instant* as seen from *location*.

    *instant* must be timezone-aware; its wall clock is taken as the local
    civil time and its UTC offset converts that to solar time. With
    *daylight_only* a sun below the horizon raises :class:`SunNeverRises`
    instead of returning a negative altitude. Without it the call never raises
    :class:`SunNeverRises`, so the raising behaviour is opt-in.
    """

    if not isinstance(instant, datetime) or instant.tzinfo is None:
        raise InvalidDate("instant must be a timezone-aware datetime")
    offset = instant.utcoffset()
    if offset is None:
        raise InvalidDate("instant has no resolvable UTC offset")

    local_hour = (
        instant.hour
        + instant.minute / 60.0
        + (instant.second + instant.microsecond / 1_000_000) / 3600.0
    )
    n = day_of_year(instant.date())
    gamma = 2.0 * math.pi / 365.0 * (n - 1 + (local_hour - 12.0) / 24.0)

    eq_time = equation_of_time(gamma)
    decl = declination(gamma)

    true_solar_time = (
        local_hour
        + eq_time / 60.0
        + location.longitude / 15.0
        - offset.total_seconds() / 3600.0
    )
    # Offsets far from longitude/15 push this well past one turn.
    hour_angle = normalize_degrees(15.0 * (true_solar_time - 12.0) + 180.0) - 180.0
    ha_rad = math.radians(hour_angle)

    lat_rad = math.radians(location.latitude)
    cos_zenith = math.sin(lat_rad) * math.sin(decl) + math.cos(lat_rad) * math.cos(
        decl
    ) * math.cos(ha_rad)
    zenith = math.acos(max(-1.0, min(1.0, cos_zenith)))
    zenith_deg = math.degrees(zenith)
    altitude = 90.0 - zenith_deg

    sin_zenith = math.sin(zenith)
    if sin_zenith < 1e-12:
        # Sun at the zenith or nadir: azimuth is undefined, report due south.
        azimuth = 180.0
    else:
        cos_azimuth = (
            math.sin(decl) * math.cos(lat_rad)
            - math.cos(decl) * math.sin(lat_rad) * math.cos(ha_rad)
        ) / sin_zenith
        azimuth = math.degrees(math.acos(max(-1.0, min(1.0, cos_azimuth))))
        if hour_angle > 0:
            azimuth = 360.0 - azimuth
    azimuth = normalize_degrees(azimuth)

    if daylight_only:
        if zenith_deg >= 90.0:
            raise SunNeverRises(f"sun is below the horizon at {instant.isoformat()}")
        if zenith_deg <= -90.0:
            raise SunNeverSets(f"sun is beyond the nadir at {instant.isoformat()}")

    return SolarPosition(instant=instant, altitude=altitude, azimuth=azimuth)
