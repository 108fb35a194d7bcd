from __future__ import annotations

import sys
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from periods import GeoLocation, SunriseSunset  # noqa: E402

# 2025-03-16 is a Sunday.
SUNDAY = date(2025, 3, 16)


class FakeSunProvider:
    """Fixed sunrise/sunset every day, with optional gaps and overrides."""

    def __init__(
        self,
        sunrise: time = time(6, 0),
        sunset: time = time(18, 0),
        missing: Iterable[date] = (),
        overrides: Optional[Dict[date, Tuple[Optional[datetime], Optional[datetime]]]] = None,
        tz: tzinfo = UTC,
    ) -> None:
        self.tz = tz
        self.sunrise = sunrise
        self.sunset = sunset
        self.missing = set(missing)
        self.overrides = dict(overrides or {})
        self.calls: List[date] = []

    def get_sunrise_sunset(self, day: date, location: GeoLocation) -> SunriseSunset:
        self.calls.append(day)
        if day in self.missing:
            return SunriseSunset(sunrise=None, sunset=None, status="polar_night")
        if day in self.overrides:
            sunrise, sunset = self.overrides[day]
            return SunriseSunset(sunrise=sunrise, sunset=sunset)
        return SunriseSunset(
            sunrise=datetime.combine(day, self.sunrise, tzinfo=self.tz),
            sunset=datetime.combine(day, self.sunset, tzinfo=self.tz),
        )


def at(day: date, hour: int, minute: int = 0, second: int = 0, microsecond: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute, second, microsecond), tzinfo=UTC)


@pytest.fixture
def location() -> GeoLocation:
    return GeoLocation(latitude=28.6139, longitude=77.2090)


@pytest.fixture
def provider() -> FakeSunProvider:
    return FakeSunProvider()


@pytest.fixture
def one_microsecond() -> timedelta:
    return timedelta(microseconds=1)
