from __future__ import annotations

import calendar

import pytest

from periods.labels import (
    CHALDEAN_ORDER,
    DAY_RULERS,
    EIGHT_FOLD_DAY_TABLE,
    EIGHT_FOLD_NIGHT_TABLE,
    EightFoldLabeler,
    EightFoldType,
    Planet,
    PlanetaryHourLabeler,
)

U, C, L, A, K, S, R = (
    EightFoldType.UDVEG,
    EightFoldType.CHAR,
    EightFoldType.LABH,
    EightFoldType.AMRIT,
    EightFoldType.KAAL,
    EightFoldType.SHUBH,
    EightFoldType.ROG,
)


def test_chaldean_order() -> None:
    assert [planet.value for planet in CHALDEAN_ORDER] == [
        "Saturn",
        "Jupiter",
        "Mars",
        "Sun",
        "Venus",
        "Mercury",
        "Moon",
    ]


def test_sunday_hours_start_with_sun() -> None:
    labeler = PlanetaryHourLabeler()

    assert labeler.label(calendar.SUNDAY, 0, True) is Planet.SUN
    assert labeler.label(calendar.SUNDAY, 1, True) is Planet.VENUS
    assert labeler.label(calendar.SUNDAY, 3, True) is Planet.MOON


@pytest.mark.parametrize("weekday", range(7))
def test_first_night_hour_continues_the_day_sequence(weekday: int) -> None:
    labeler = PlanetaryHourLabeler()
    start = CHALDEAN_ORDER.index(DAY_RULERS[weekday])

    first_night = labeler.label(weekday, 0, False)
    assert first_night is CHALDEAN_ORDER[(start + 5) % 7]
    assert first_night is CHALDEAN_ORDER[(start + 12) % 7]


@pytest.mark.parametrize("weekday", range(7))
def test_hour_after_last_night_hour_is_next_day_ruler(weekday: int) -> None:
    labeler = PlanetaryHourLabeler()
    last_night = labeler.label(weekday, 11, False)
    following = CHALDEAN_ORDER[(CHALDEAN_ORDER.index(last_night) + 1) % 7]

    assert following is DAY_RULERS[(weekday + 1) % 7]


def test_saturday_day_hours() -> None:
    labeler = PlanetaryHourLabeler()
    hours = [labeler.label(calendar.SATURDAY, i, True) for i in range(4)]

    assert hours == [Planet.SATURN, Planet.JUPITER, Planet.MARS, Planet.SUN]


def test_sunday_eight_fold_tables() -> None:
    labeler = EightFoldLabeler()

    assert [labeler.label(calendar.SUNDAY, i, True) for i in range(8)] == [U, C, L, A, K, S, R, U]
    assert [labeler.label(calendar.SUNDAY, i, False) for i in range(8)] == [S, A, C, R, K, L, U, S]


def test_monday_and_saturday_rows() -> None:
    assert EIGHT_FOLD_DAY_TABLE[calendar.MONDAY] == (A, K, S, R, U, C, L, A)
    assert EIGHT_FOLD_NIGHT_TABLE[calendar.MONDAY] == (C, R, K, L, U, S, A, C)
    assert EIGHT_FOLD_DAY_TABLE[calendar.SATURDAY] == (K, S, R, U, C, L, A, K)
    assert EIGHT_FOLD_NIGHT_TABLE[calendar.SATURDAY] == (L, U, S, A, C, R, K, L)


@pytest.mark.parametrize("table", [EIGHT_FOLD_DAY_TABLE, EIGHT_FOLD_NIGHT_TABLE])
def test_eight_fold_rows_are_complete(table) -> None:
    assert sorted(table) == list(range(7))
    for row in table.values():
        assert len(row) == 8
        assert row[0] is row[-1]
        assert set(row) == set(EightFoldType)


def test_day_row_opens_with_the_weekday_rulers_type() -> None:
    for weekday, row in EIGHT_FOLD_DAY_TABLE.items():
        assert row[0].ruler is DAY_RULERS[weekday]


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        EIGHT_FOLD_DAY_TABLE[calendar.SUNDAY] = ()  # type: ignore[index]


def test_eight_fold_qualities() -> None:
    assert {t for t in EightFoldType if t.is_auspicious} == {A, S, L, C}
    assert K.meaning == "Death"
    assert "business" in L.favorable_activities


def test_planet_qualities() -> None:
    assert Planet.SATURN.is_auspicious is False
    assert Planet.JUPITER.is_auspicious is True
    assert "writing" in Planet.MERCURY.favorable_activities


def test_label_rejects_out_of_range_indices() -> None:
    with pytest.raises(ValueError):
        PlanetaryHourLabeler().label(calendar.SUNDAY, 12, True)
    with pytest.raises(ValueError):
        EightFoldLabeler().label(calendar.SUNDAY, 8, False)
    with pytest.raises(ValueError):
        EightFoldLabeler().label(7, 0, True)
