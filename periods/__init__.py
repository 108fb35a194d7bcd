"""Planetary hours and eight-fold day periods anchored on local sunrise."""

from .day_window import DayWindow, DayWindowResolver
from .engine import (
    EightFoldEngine,
    Period,
    PeriodEngine,
    PlanetaryHourEngine,
    current_eight_fold_period,
    current_planetary_hour,
    eight_fold_periods_for_day,
    favorable_periods,
    period_at,
    planetary_hours_for_day,
)
from .inauspicious import Kalam, active_inauspicious, inauspicious_periods
from .labels import CHALDEAN_ORDER, EightFoldType, Planet
from .provider import (
    GeoLocation,
    MissingAstronomicalDataError,
    SunEventProvider,
    SunriseSunset,
)
from .segments import Segment, locate, partition

__all__ = [
    "CHALDEAN_ORDER",
    "DayWindow",
    "DayWindowResolver",
    "EightFoldEngine",
    "EightFoldType",
    "GeoLocation",
    "Kalam",
    "MissingAstronomicalDataError",
    "Period",
    "PeriodEngine",
    "Planet",
    "PlanetaryHourEngine",
    "Segment",
    "SunEventProvider",
    "SunriseSunset",
    "active_inauspicious",
    "current_eight_fold_period",
    "current_planetary_hour",
    "eight_fold_periods_for_day",
    "favorable_periods",
    "inauspicious_periods",
    "locate",
    "partition",
    "period_at",
    "planetary_hours_for_day",
]
