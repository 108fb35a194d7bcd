"""Ruler lookup tables for planetary hours and eight-fold (Choghadiya) periods."""

from __future__ import annotations

import calendar
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

__all__ = [
    "CHALDEAN_ORDER",
    "DAY_RULERS",
    "EIGHT_FOLD_DAY_TABLE",
    "EIGHT_FOLD_NIGHT_TABLE",
    "EightFoldLabeler",
    "EightFoldType",
    "Planet",
    "PlanetaryHourLabeler",
]


class Planet(str, Enum):
    """The seven classical planets."""

    SATURN = "Saturn"
    JUPITER = "Jupiter"
    MARS = "Mars"
    SUN = "Sun"
    VENUS = "Venus"
    MERCURY = "Mercury"
    MOON = "Moon"

    @property
    def is_auspicious(self) -> bool:
        return self in _AUSPICIOUS_PLANETS

    @property
    def favorable_activities(self) -> Tuple[str, ...]:
        return _PLANET_ACTIVITIES[self]


class EightFoldType(str, Enum):
    """Choghadiya period types."""

    UDVEG = "Udveg"
    CHAR = "Char"
    LABH = "Labh"
    AMRIT = "Amrit"
    KAAL = "Kaal"
    SHUBH = "Shubh"
    ROG = "Rog"

    @property
    def meaning(self) -> str:
        return _EIGHT_FOLD_QUALITIES[self][0]

    @property
    def is_auspicious(self) -> bool:
        return _EIGHT_FOLD_QUALITIES[self][1]

    @property
    def ruler(self) -> Planet:
        return _EIGHT_FOLD_QUALITIES[self][2]

    @property
    def favorable_activities(self) -> Tuple[str, ...]:
        return _EIGHT_FOLD_QUALITIES[self][3]


# Slowest to fastest apparent motion.
CHALDEAN_ORDER: Tuple[Planet, ...] = (
    Planet.SATURN,
    Planet.JUPITER,
    Planet.MARS,
    Planet.SUN,
    Planet.VENUS,
    Planet.MERCURY,
    Planet.MOON,
)

DAY_RULERS: Mapping[int, Planet] = MappingProxyType(
    {
        calendar.SUNDAY: Planet.SUN,
        calendar.MONDAY: Planet.MOON,
        calendar.TUESDAY: Planet.MARS,
        calendar.WEDNESDAY: Planet.MERCURY,
        calendar.THURSDAY: Planet.JUPITER,
        calendar.FRIDAY: Planet.VENUS,
        calendar.SATURDAY: Planet.SATURN,
    }
)

_AUSPICIOUS_PLANETS = frozenset(
    {Planet.SUN, Planet.MOON, Planet.MERCURY, Planet.JUPITER, Planet.VENUS}
)

_PLANET_ACTIVITIES: Mapping[Planet, Tuple[str, ...]] = MappingProxyType(
    {
        Planet.SUN: ("health", "authority", "government", "father"),
        Planet.MOON: ("emotions", "mother", "fluids", "travel"),
        Planet.MARS: ("surgery", "mechanical", "sports", "military"),
        Planet.MERCURY: ("business", "education", "writing", "communication"),
        Planet.JUPITER: ("worship", "marriage", "children", "education", "religion"),
        Planet.VENUS: ("love", "marriage", "art", "beauty", "luxury"),
        Planet.SATURN: ("labor", "construction", "iron", "oil"),
    }
)

# meaning, auspicious, ruling planet, favourable activities
_EIGHT_FOLD_QUALITIES: Mapping[EightFoldType, Tuple[str, bool, Planet, Tuple[str, ...]]] = (
    MappingProxyType(
        {
            EightFoldType.AMRIT: ("Nectar", True, Planet.MOON, ("all", "auspicious")),
            EightFoldType.SHUBH: (
                "Auspicious",
                True,
                Planet.JUPITER,
                ("auspicious", "beginnings", "travel"),
            ),
            EightFoldType.LABH: (
                "Gain",
                True,
                Planet.MERCURY,
                ("business", "investment", "learning"),
            ),
            EightFoldType.CHAR: (
                "Moving",
                True,
                Planet.VENUS,
                ("travel", "relocation", "journey"),
            ),
            EightFoldType.UDVEG: (
                "Anxiety",
                False,
                Planet.SUN,
                ("routine work", "avoid decisions"),
            ),
            EightFoldType.KAAL: (
                "Death",
                False,
                Planet.SATURN,
                ("avoid all auspicious activities",),
            ),
            EightFoldType.ROG: (
                "Disease",
                False,
                Planet.MARS,
                ("avoid medical procedures", "avoid travel"),
            ),
        }
    )
)

_U, _C, _L, _A, _K, _S, _R = (
    EightFoldType.UDVEG,
    EightFoldType.CHAR,
    EightFoldType.LABH,
    EightFoldType.AMRIT,
    EightFoldType.KAAL,
    EightFoldType.SHUBH,
    EightFoldType.ROG,
)

EIGHT_FOLD_DAY_TABLE: Mapping[int, Tuple[EightFoldType, ...]] = MappingProxyType(
    {
        calendar.SUNDAY: (_U, _C, _L, _A, _K, _S, _R, _U),
        calendar.MONDAY: (_A, _K, _S, _R, _U, _C, _L, _A),
        calendar.TUESDAY: (_R, _U, _C, _L, _A, _K, _S, _R),
        calendar.WEDNESDAY: (_L, _A, _K, _S, _R, _U, _C, _L),
        calendar.THURSDAY: (_S, _R, _U, _C, _L, _A, _K, _S),
        calendar.FRIDAY: (_C, _L, _A, _K, _S, _R, _U, _C),
        calendar.SATURDAY: (_K, _S, _R, _U, _C, _L, _A, _K),
    }
)

EIGHT_FOLD_NIGHT_TABLE: Mapping[int, Tuple[EightFoldType, ...]] = MappingProxyType(
    {
        calendar.SUNDAY: (_S, _A, _C, _R, _K, _L, _U, _S),
        calendar.MONDAY: (_C, _R, _K, _L, _U, _S, _A, _C),
        calendar.TUESDAY: (_K, _L, _U, _S, _A, _C, _R, _K),
        calendar.WEDNESDAY: (_U, _S, _A, _C, _R, _K, _L, _U),
        calendar.THURSDAY: (_A, _C, _R, _K, _L, _U, _S, _A),
        calendar.FRIDAY: (_R, _K, _L, _U, _S, _A, _C, _R),
        calendar.SATURDAY: (_L, _U, _S, _A, _C, _R, _K, _L),
    }
)


def _check(weekday: int, index: int, segment_count: int) -> None:
    if weekday not in DAY_RULERS:
        raise ValueError(f"weekday must be in 0..6, got {weekday}")
    if not 0 <= index < segment_count:
        raise ValueError(f"segment index must be in 0..{segment_count - 1}, got {index}")


class PlanetaryHourLabeler:
    """Chaldean rotation started at the weekday's day ruler.

    The night continues the unbroken sequence after twelve day hours, and
    ``12 % 7 == 5``, so the first night hour sits five places past the day ruler.
    """

    segment_count = 12

    def label(self, weekday: int, index: int, is_daytime: bool) -> Planet:
        _check(weekday, index, self.segment_count)
        start = CHALDEAN_ORDER.index(DAY_RULERS[weekday])
        if not is_daytime:
            start += 5
        return CHALDEAN_ORDER[(start + index) % len(CHALDEAN_ORDER)]


class EightFoldLabeler:
    """Per-weekday table lookup for the eight-fold system."""

    segment_count = 8

    def label(self, weekday: int, index: int, is_daytime: bool) -> EightFoldType:
        _check(weekday, index, self.segment_count)
        table = EIGHT_FOLD_DAY_TABLE if is_daytime else EIGHT_FOLD_NIGHT_TABLE
        return table[weekday][index]
