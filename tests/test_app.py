from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from datasource.http_source import FetchError, StaticDataSource
from services.dashboard import DashboardService

RAW = [
    {"timestamp": "2024-01-01T00:00:00Z", "time": "00:00", "temperature": 20},
    {"timestamp": "2024-01-02T00:00:00Z", "time": "00:00", "temperature": 22},
    {"timestamp": "2023-12-01T00:00:00Z", "time": "old", "temperature": 15, "co2": 400},
    {"time": "08:00", "humidity": 55},
]


def _install_dashboard(monkeypatch, source: StaticDataSource) -> DashboardService:
    dashboard = DashboardService(source=source)

    def build_test_dashboard() -> DashboardService:
        return dashboard

    build_test_dashboard.cache_clear = lambda: None  # type: ignore[attr-defined]

    monkeypatch.setattr("app.main.build_default_dashboard", build_test_dashboard)
    monkeypatch.setattr("app.api.build_default_dashboard", build_test_dashboard)
    monkeypatch.setattr("app.web.build_default_dashboard", build_test_dashboard)
    return dashboard


@pytest.fixture
def source() -> StaticDataSource:
    return StaticDataSource(RAW)


@pytest.fixture
def api_client(source: StaticDataSource, monkeypatch) -> Iterator[TestClient]:
    _install_dashboard(monkeypatch, source)
    app = create_app()
    with TestClient(app) as client:
        yield client


def test_lifespan_loads_dataset_once(api_client: TestClient, source: StaticDataSource) -> None:
    api_client.get("/api/series")
    api_client.get("/api/series", params={"window": "all"})

    assert source.calls == 1


def test_health_endpoints(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["status"] == "ok"


def test_options_lists_windows_and_variables(api_client: TestClient) -> None:
    payload = api_client.get("/api/options").json()

    assert [option["key"] for option in payload["windows"]] == ["24h", "7d", "30d", "all"]
    assert [option["key"] for option in payload["variables"]] == [
        "temperature",
        "humidity",
        "vpo",
        "dewPoint",
        "ec",
        "pH",
        "co2",
    ]
    assert payload["windows"][0]["label"] == "24 ชั่วโมง"
    assert payload["default_window"] == "24h"
    assert payload["default_variable"] == "temperature"


def test_status_reports_dropped_entries(api_client: TestClient) -> None:
    payload = api_client.get("/api/status").json()

    assert payload == {
        "loaded": True,
        "entry_count": 4,
        "reading_count": 3,
        "dropped_count": 1,
        "error": None,
    }


def test_series_defaults_to_last_24_hours(api_client: TestClient) -> None:
    response = api_client.get("/api/series")

    assert response.status_code == 200
    payload = response.json()
    assert payload["window"] == "24h"
    assert payload["variable"] == "temperature"
    assert payload["labels"] == ["00:00", "00:00"]
    assert payload["values"] == [20.0, 22.0]
    assert payload["degenerate"] is False
    assert payload["reading_count"] == 2
    assert payload["anchor"].startswith("2024-01-02T00:00:00")
    assert payload["lower_bound"].startswith("2024-01-01T00:00:00")


def test_series_for_all_and_other_variable(api_client: TestClient) -> None:
    payload = api_client.get("/api/series", params={"window": "all", "variable": "co2"}).json()

    assert payload["labels"] == ["00:00", "00:00", "old"]
    assert payload["values"] == [0.0, 0.0, 400.0]
    assert payload["lower_bound"] is None


def test_unknown_window_fails_open(api_client: TestClient) -> None:
    payload = api_client.get("/api/series", params={"window": "1y"}).json()

    assert payload["window"] == "all"
    assert payload["reading_count"] == 3


def test_unknown_variable_is_rejected(api_client: TestClient) -> None:
    response = api_client.get("/api/series", params={"variable": "pressure"})

    assert response.status_code == 422


def test_failed_fetch_serves_degenerate_series_and_reload(monkeypatch) -> None:
    source = StaticDataSource(error=FetchError("HTTP 502", 502))
    _install_dashboard(monkeypatch, source)

    with TestClient(create_app()) as client:
        status = client.get("/api/status").json()
        series = client.get("/api/series").json()

        source.error = None
        source.entries = RAW
        reloaded = client.post("/api/reload").json()

    assert status["error"] == "HTTP 502"
    assert series["degenerate"] is True
    assert series["values"] == [0.0]
    assert reloaded["error"] is None
    assert reloaded["reading_count"] == 3


def test_ui_renders_dashboard(api_client: TestClient) -> None:
    response = api_client.get("/ui", params={"window": "7d", "variable": "humidity"})

    assert response.status_code == 200
    body = response.text
    assert "ระบบตรวจจับความผิดปกติของเซ็นเซอร์" in body
    assert "ความชื้น (%)" in body
    assert "window=7d" in body


def test_ui_rejects_unknown_variable(api_client: TestClient) -> None:
    response = api_client.get("/ui", params={"variable": "pressure"})

    assert response.status_code == 422


def test_ui_reload_redirects(api_client: TestClient, source: StaticDataSource) -> None:
    response = api_client.post("/ui/reload", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/ui"
    assert source.calls == 2
