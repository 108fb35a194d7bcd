from __future__ import annotations

import json
from datetime import timedelta, timezone

from conftest import SUNDAY, FakeSunProvider
from periods_cli import main

LOCATION_ARGS = ["--lat", "28.6139", "--lon", "77.209", "--tz", "0"]


def test_current_hora(capsys) -> None:
    code = main(
        ["hora", *LOCATION_ARGS, "--at", "2025-03-16T09:30:00+00:00"],
        provider=FakeSunProvider(),
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["period"]["label"] == "Moon"
    assert payload["period"]["ordinal"] == 4


def test_aware_instant_is_read_in_location_offset(capsys) -> None:
    code = main(
        ["hora", "--lat", "-33.87", "--lon", "151.21", "--tz", "10"]
        + ["--at", "2025-10-25T22:00:00Z"],
        provider=FakeSunProvider(tz=timezone(timedelta(hours=10))),
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["at"] == "2025-10-26T08:00:00+10:00"
    assert payload["period"]["label"] == "Mercury"
    assert payload["period"]["start"] == "2025-10-26T08:00:00+10:00"
    assert payload["period"]["is_daytime"] is True


def test_choghadiya_listing(capsys) -> None:
    code = main(
        ["choghadiya", *LOCATION_ARGS, "--date", "2025-03-16"], provider=FakeSunProvider()
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert len(payload["periods"]) == 16
    assert payload["periods"][0]["label"] == "Udveg"


def test_inauspicious_listing(capsys) -> None:
    code = main(
        ["inauspicious", *LOCATION_ARGS, "--date", "2025-03-16"], provider=FakeSunProvider()
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [p["label"] for p in payload["periods"]][-1] == "Rahu Kalam"


def test_sun(capsys) -> None:
    code = main(
        ["sun", *LOCATION_ARGS, "--date", "2025-03-16"], provider=FakeSunProvider()
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "ok"
    assert payload["sunset"].startswith("2025-03-16T18:00:00")


def test_missing_data_exit_code(capsys) -> None:
    provider = FakeSunProvider(missing=[SUNDAY])

    code = main(["hora", *LOCATION_ARGS, "--date", "2025-03-16"], provider=provider)

    assert code == 2
    assert capsys.readouterr().out == ""
