"""Value types shared by the solvers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

__all__ = ["GeoCoordinate", "Polarity", "SolarEventKind", "SolarPosition"]


@dataclass(frozen=True)
class GeoCoordinate:
    """Geographic position in degrees (north and east positive)."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude must be within [-180, 180]: {self.longitude}")


class Polarity(str, Enum):
    """Which root of the hour-angle equation an event uses."""

    dawn = "dawn"
    dusk = "dusk"
    noon = "noon"


class SolarEventKind(str, Enum):
    """Named solar events with their zenith thresholds."""

    sunrise = "sunrise"
    sunset = "sunset"
    civil_dawn = "civilDawn"
    civil_dusk = "civilDusk"
    nautical_dawn = "nauticalDawn"
    nautical_dusk = "nauticalDusk"
    astronomical_dawn = "astronomicalDawn"
    astronomical_dusk = "astronomicalDusk"
    solar_noon = "solarNoon"

    @property
    def zenith(self) -> float:
        """Zenith angle in degrees that defines the event."""
        return _EVENT_TABLE[self][0]

    @property
    def polarity(self) -> Polarity:
        return _EVENT_TABLE[self][1]

    @property
    def label(self) -> str:
        return _EVENT_TABLE[self][2]


_EVENT_TABLE = {
    SolarEventKind.sunrise: (90.833, Polarity.dawn, "Sunrise"),
    SolarEventKind.sunset: (90.833, Polarity.dusk, "Sunset"),
    SolarEventKind.civil_dawn: (96.0, Polarity.dawn, "Civil Dawn"),
    SolarEventKind.civil_dusk: (96.0, Polarity.dusk, "Civil Dusk"),
    SolarEventKind.nautical_dawn: (102.0, Polarity.dawn, "Nautical Dawn"),
    SolarEventKind.nautical_dusk: (102.0, Polarity.dusk, "Nautical Dusk"),
    SolarEventKind.astronomical_dawn: (108.0, Polarity.dawn, "Astronomical Dawn"),
    SolarEventKind.astronomical_dusk: (108.0, Polarity.dusk, "Astronomical Dusk"),
    SolarEventKind.solar_noon: (90.0, Polarity.noon, "Solar Noon"),
}


@dataclass(frozen=True)
class SolarPosition:
    """Apparent sun position for one instant."""

    instant: datetime
    altitude: float  # degrees above the horizon
    azimuth: float  # degrees clockwise from north, [0, 360)
