from __future__ import annotations

from datetime import timedelta, timezone
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from conftest import SUNDAY, FakeSunProvider
from periods_api import create_app

BASE_PARAMS = {"lat": 28.6139, "lon": 77.209}


@pytest.fixture
def client() -> Iterable[TestClient]:
    provider = FakeSunProvider(missing=[SUNDAY + timedelta(days=30)])
    with TestClient(create_app(provider=provider)) as test_client:
        yield test_client


def test_current_hora(client: TestClient) -> None:
    response = client.get(
        "/hora/current", params={**BASE_PARAMS, "at": "2025-03-16T09:30:00+00:00"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["system"] == "hora"
    assert payload["period"]["label"] == "Moon"
    assert payload["period"]["ordinal"] == 4
    assert payload["period"]["is_daytime"] is True
    assert payload["period"]["start"].startswith("2025-03-16T09:00:00")
    assert payload["period"]["end"].startswith("2025-03-16T10:00:00")


def test_naive_instant_uses_location_offset(client: TestClient) -> None:
    response = client.get(
        "/choghadiya/current", params={**BASE_PARAMS, "at": "2025-03-16T18:00:00"}
    )

    assert response.status_code == 200
    period = response.json()["period"]
    assert period["label"] == "Shubh"
    assert period["is_daytime"] is False


def test_aware_instant_is_read_in_location_offset() -> None:
    provider = FakeSunProvider(tz=timezone(timedelta(hours=10)))
    with TestClient(create_app(provider=provider)) as test_client:
        # 22:00Z is 08:00 on Sunday 2025-10-26 at +10:00.
        response = test_client.get(
            "/hora/current",
            params={**BASE_PARAMS, "offset_hours": 10, "at": "2025-10-25T22:00:00Z"},
        )

    assert response.status_code == 200
    payload = response.json()
    assert payload["at"] == "2025-10-26T08:00:00+10:00"
    assert payload["period"]["label"] == "Mercury"
    assert payload["period"]["ordinal"] == 3
    assert payload["period"]["is_daytime"] is True
    assert payload["period"]["start"] == "2025-10-26T08:00:00+10:00"
    assert payload["period"]["end"] == "2025-10-26T09:00:00+10:00"


def test_hora_day_listing(client: TestClient) -> None:
    response = client.get("/hora/day", params={**BASE_PARAMS, "date": "2025-03-16"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["date"] == "2025-03-16"
    assert len(payload["periods"]) == 24
    assert payload["periods"][0]["label"] == "Sun"
    assert payload["periods"][12]["label"] == "Jupiter"


def test_choghadiya_day_listing(client: TestClient) -> None:
    response = client.get("/choghadiya/day", params={**BASE_PARAMS, "date": "2025-03-16"})

    assert response.status_code == 200
    labels = [p["label"] for p in response.json()["periods"]]
    assert labels[:8] == ["Udveg", "Char", "Labh", "Amrit", "Kaal", "Shubh", "Rog", "Udveg"]
    assert len(labels) == 16


def test_inauspicious_listing(client: TestClient) -> None:
    response = client.get("/inauspicious", params={**BASE_PARAMS, "date": "2025-03-16"})

    assert response.status_code == 200
    labels = [p["label"] for p in response.json()["periods"]]
    assert labels == ["Yamaganda", "Gulika Kalam", "Rahu Kalam"]


def test_sun_endpoint(client: TestClient) -> None:
    response = client.get("/sun", params={**BASE_PARAMS, "date": "2025-03-16"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["sunrise"].startswith("2025-03-16T06:00:00")
    assert payload["source"] == "CSPICE-DE"


def test_missing_astronomical_data(client: TestClient) -> None:
    response = client.get("/hora/day", params={**BASE_PARAMS, "date": "2025-04-15"})

    assert response.status_code == 422
    payload = response.json()
    assert payload["ok"] is False
    assert payload["code"] == "missing_astronomical_data"


def test_validation_error(client: TestClient) -> None:
    response = client.get("/hora/day", params={"lat": 95, "lon": 0, "date": "2025-03-16"})

    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == "validation_error"
    assert payload["ok"] is False


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert isinstance(payload["files"], list)
