"""Period engines composing day-window resolution, partitioning and labelling."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol, Union

from .day_window import DayWindow, DayWindowResolver
from .labels import EightFoldLabeler, EightFoldType, Planet, PlanetaryHourLabeler
from .provider import GeoLocation, SunEventProvider
from .segments import Segment, partition, segment_at

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from .inauspicious import Kalam

__all__ = [
    "EightFoldEngine",
    "Period",
    "PeriodEngine",
    "PlanetaryHourEngine",
    "current_eight_fold_period",
    "current_planetary_hour",
    "eight_fold_periods_for_day",
    "favorable_periods",
    "period_at",
    "planetary_hours_for_day",
]

Label = Union[Planet, EightFoldType, "Kalam"]


class Labeler(Protocol):
    segment_count: int

    def label(self, weekday: int, index: int, is_daytime: bool) -> Label:
        ...


@dataclass(frozen=True)
class Period:
    """A labelled segment; ``ordinal`` is its 1-based position in its half-day."""

    label: Label
    segment: Segment
    ordinal: int

    @property
    def start(self) -> datetime:
        return self.segment.start

    @property
    def end(self) -> datetime:
        return self.segment.end

    @property
    def is_daytime(self) -> bool:
        return self.segment.is_daytime

    @property
    def duration(self) -> timedelta:
        return self.segment.duration

    @property
    def is_auspicious(self) -> bool:
        return self.label.is_auspicious

    def contains(self, instant: datetime) -> bool:
        return self.segment.contains(instant)

    def is_favorable_for(self, activity: str) -> bool:
        wanted = activity.strip().lower()
        return any(item.lower() == wanted for item in self.label.favorable_activities)


def _labelled(segment: Segment, weekday: int, labeler: Labeler) -> Period:
    return Period(
        label=labeler.label(weekday, segment.index, segment.is_daytime),
        segment=segment,
        ordinal=segment.index + 1,
    )


class PeriodEngine:
    """Answers period queries for one labelling system."""

    def __init__(self, provider: SunEventProvider, labeler: Labeler) -> None:
        self.labeler = labeler
        self.resolver = DayWindowResolver(provider)

    @property
    def segment_count(self) -> int:
        return self.labeler.segment_count

    def current_period(self, instant: datetime, location: GeoLocation) -> Period:
        """Period containing *instant*.

        Daytime queries cost one or two provider calls, night queries one more
        for the sunrise that closes the night.
        """

        window = self.resolver.resolve(instant, location)
        if window.is_daytime(instant):
            segment = segment_at(
                instant,
                window.sunrise,
                window.sunset,
                self.segment_count,
                is_daytime=True,
            )
        else:
            next_sunrise = self.resolver.next_sunrise(window, location)
            segment = segment_at(
                instant,
                window.sunset,
                next_sunrise,
                self.segment_count,
                is_daytime=False,
            )
        return _labelled(segment, window.weekday, self.labeler)

    def periods_for_day(self, day: date, location: GeoLocation) -> List[Period]:
        """All periods from the sunrise of civil *day* to the following sunrise."""

        window = self.resolver.window_for(day, location)
        next_sunrise = self.resolver.next_sunrise(window, location)
        return self._periods_for_window(window, next_sunrise)

    def _periods_for_window(self, window: DayWindow, next_sunrise: datetime) -> List[Period]:
        segments = partition(
            window.sunrise, window.sunset, self.segment_count, is_daytime=True
        ) + partition(window.sunset, next_sunrise, self.segment_count, is_daytime=False)
        return [_labelled(segment, window.weekday, self.labeler) for segment in segments]


class PlanetaryHourEngine(PeriodEngine):
    def __init__(self, provider: SunEventProvider) -> None:
        super().__init__(provider, PlanetaryHourLabeler())


class EightFoldEngine(PeriodEngine):
    def __init__(self, provider: SunEventProvider) -> None:
        super().__init__(provider, EightFoldLabeler())


def current_planetary_hour(
    instant: datetime, location: GeoLocation, provider: SunEventProvider
) -> Period:
    return PlanetaryHourEngine(provider).current_period(instant, location)


def planetary_hours_for_day(
    day: date, location: GeoLocation, provider: SunEventProvider
) -> List[Period]:
    return PlanetaryHourEngine(provider).periods_for_day(day, location)


def current_eight_fold_period(
    instant: datetime, location: GeoLocation, provider: SunEventProvider
) -> Period:
    return EightFoldEngine(provider).current_period(instant, location)


def eight_fold_periods_for_day(
    day: date, location: GeoLocation, provider: SunEventProvider
) -> List[Period]:
    return EightFoldEngine(provider).periods_for_day(day, location)


def period_at(periods: Iterable[Period], instant: datetime) -> Optional[Period]:
    """First period of *periods* containing *instant*, if any."""

    for period in periods:
        if period.contains(instant):
            return period
    return None


def favorable_periods(periods: Iterable[Period]) -> List[Period]:
    return [period for period in periods if period.is_auspicious]
