"""Rahu Kalam, Gulika Kalam and Yamaganda: weekday-selected eighths of the day."""

from __future__ import annotations

import calendar
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from .day_window import DayWindowResolver
from .engine import Period
from .provider import GeoLocation, SunEventProvider
from .segments import partition

__all__ = ["KALAM_PORTIONS", "Kalam", "active_inauspicious", "inauspicious_periods"]


class Kalam(str, Enum):
    RAHU = "Rahu Kalam"
    GULIKA = "Gulika Kalam"
    YAMAGANDA = "Yamaganda"

    @property
    def is_auspicious(self) -> bool:
        return False

    @property
    def favorable_activities(self) -> Tuple[str, ...]:
        return ()


# 1-based eighth of the daytime span, per weekday.
KALAM_PORTIONS: Mapping[Kalam, Mapping[int, int]] = MappingProxyType(
    {
        Kalam.RAHU: MappingProxyType(
            {
                calendar.SUNDAY: 8,
                calendar.MONDAY: 2,
                calendar.TUESDAY: 7,
                calendar.WEDNESDAY: 5,
                calendar.THURSDAY: 6,
                calendar.FRIDAY: 4,
                calendar.SATURDAY: 3,
            }
        ),
        Kalam.GULIKA: MappingProxyType(
            {
                calendar.SUNDAY: 7,
                calendar.MONDAY: 6,
                calendar.TUESDAY: 5,
                calendar.WEDNESDAY: 4,
                calendar.THURSDAY: 3,
                calendar.FRIDAY: 2,
                calendar.SATURDAY: 1,
            }
        ),
        Kalam.YAMAGANDA: MappingProxyType(
            {
                calendar.SUNDAY: 5,
                calendar.MONDAY: 4,
                calendar.TUESDAY: 3,
                calendar.WEDNESDAY: 2,
                calendar.THURSDAY: 1,
                calendar.FRIDAY: 7,
                calendar.SATURDAY: 6,
            }
        ),
    }
)


def inauspicious_periods(
    day: date, location: GeoLocation, provider: SunEventProvider
) -> List[Period]:
    """The three inauspicious portions of civil *day*, earliest first."""

    window = DayWindowResolver(provider).window_for(day, location)
    eighths = partition(window.sunrise, window.sunset, 8, is_daytime=True)
    periods = []
    for kalam, portions in KALAM_PORTIONS.items():
        ordinal = portions[window.weekday]
        periods.append(Period(label=kalam, segment=eighths[ordinal - 1], ordinal=ordinal))
    return sorted(periods, key=lambda period: period.start)


def active_inauspicious(periods: Iterable[Period], instant: datetime) -> Optional[Kalam]:
    for period in periods:
        if period.contains(instant):
            return period.label
    return None
