"""Resolution of the astronomical day (sunrise to next sunrise) holding an instant."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .provider import (
    FALLBACK_DAY_LENGTH,
    GeoLocation,
    MissingAstronomicalDataError,
    SunEventProvider,
)

__all__ = ["DayWindow", "DayWindowResolver"]

LOGGER = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DayWindow:
    """Sunrise and sunset anchoring one astronomical day."""

    sunrise: datetime
    sunset: datetime

    def __post_init__(self) -> None:
        if not self.sunrise < self.sunset:
            raise ValueError(
                f"sunrise {self.sunrise.isoformat()} must precede sunset {self.sunset.isoformat()}"
            )

    @property
    def weekday(self) -> int:
        """Weekday of the sunrise, Monday == 0 as in :meth:`datetime.weekday`."""

        return self.sunrise.weekday()

    @property
    def day_length(self) -> timedelta:
        return self.sunset - self.sunrise

    def is_daytime(self, instant: datetime) -> bool:
        return self.sunrise <= instant < self.sunset


class DayWindowResolver:
    """Looks up day windows through a :class:`SunEventProvider`.

    ``resolve`` makes at most two provider calls: the civil date of the instant
    and, when the instant falls before that date's sunrise, the previous date.
    The lookback is never chained further.
    """

    def __init__(self, provider: SunEventProvider) -> None:
        self._provider = provider

    def window_for(self, day: date, location: GeoLocation) -> DayWindow:
        """Window of the civil *day*, without rollover."""

        result = self._provider.get_sunrise_sunset(day, location)
        if not result.is_complete:
            raise MissingAstronomicalDataError(day, location, result.status)
        return DayWindow(sunrise=result.sunrise, sunset=result.sunset)

    def resolve(self, instant: datetime, location: GeoLocation) -> DayWindow:
        """Window of the astronomical day containing *instant*."""

        civil_day = instant.date()
        window = self.window_for(civil_day, location)
        if instant >= window.sunrise:
            return window

        previous_day = civil_day - _ONE_DAY
        previous = self._provider.get_sunrise_sunset(previous_day, location)
        if not previous.is_complete:
            LOGGER.warning(
                json.dumps(
                    {
                        "event": "sunrise_fallback",
                        "lookup": "previous_day",
                        "date": previous_day.isoformat(),
                        "status": previous.status,
                    }
                )
            )
            return window

        LOGGER.debug(
            json.dumps(
                {
                    "event": "day_rollover",
                    "instant": instant.isoformat(),
                    "date": previous_day.isoformat(),
                }
            )
        )
        return DayWindow(sunrise=previous.sunrise, sunset=previous.sunset)

    def next_sunrise(self, window: DayWindow, location: GeoLocation) -> datetime:
        """Sunrise closing the night that follows *window*.

        Falls back to ``window.sunrise + 24h`` when the provider has no sunrise
        for the following civil day.
        """

        next_day = window.sunrise.date() + _ONE_DAY
        result = self._provider.get_sunrise_sunset(next_day, location)
        if result.has_sunrise and result.sunrise > window.sunset:
            return result.sunrise

        LOGGER.warning(
            json.dumps(
                {
                    "event": "sunrise_fallback",
                    "lookup": "next_day",
                    "date": next_day.isoformat(),
                    "status": result.status,
                }
            )
        )
        return window.sunrise + FALLBACK_DAY_LENGTH
