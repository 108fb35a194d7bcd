"""Boundary types for the sunrise/sunset provider consumed by the period engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Protocol

__all__ = [
    "FALLBACK_DAY_LENGTH",
    "GeoLocation",
    "MissingAstronomicalDataError",
    "SunEventProvider",
    "SunriseSunset",
]

# Assumed sunrise-to-sunrise span when an auxiliary lookup comes back empty.
# Wrong near the poles, where consecutive sunrises can be far from 24 hours apart.
FALLBACK_DAY_LENGTH = timedelta(hours=24)


@dataclass(frozen=True)
class GeoLocation:
    """Observer location.

    ``utc_offset_hours`` fixes the local civil day used by providers; the period
    engine itself never inspects any of these fields.
    """

    latitude: float
    longitude: float
    elevation_m: float = 0.0
    utc_offset_hours: float = 0.0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")
        if not -24.0 <= self.utc_offset_hours <= 24.0:
            raise ValueError(f"utc_offset_hours out of range: {self.utc_offset_hours}")


@dataclass(frozen=True)
class SunriseSunset:
    """Sunrise and sunset for one civil day, either of which may be absent."""

    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    status: str = "ok"

    @property
    def has_sunrise(self) -> bool:
        return self.sunrise is not None

    @property
    def has_sunset(self) -> bool:
        return self.sunset is not None

    @property
    def is_complete(self) -> bool:
        return self.sunrise is not None and self.sunset is not None


class SunEventProvider(Protocol):
    """Anything able to report sunrise and sunset for a local calendar date."""

    def get_sunrise_sunset(self, day: date, location: GeoLocation) -> SunriseSunset:
        ...


class MissingAstronomicalDataError(RuntimeError):
    """Raised when sunrise or sunset of the queried day cannot be determined."""

    def __init__(self, day: date, location: object, status: str = "indeterminate") -> None:
        self.day = day
        self.location = location
        self.status = status
        super().__init__(
            f"Sunrise/sunset unavailable for {day.isoformat()} at {location!r} (status: {status})"
        )
