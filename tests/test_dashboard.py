from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from datasource.http_source import FetchError, StaticDataSource
from models.records import TimeWindow, VariableKey
from services.dashboard import DashboardSelection, DashboardService

RAW = [
    {"timestamp": "2024-01-01T00:00:00Z", "time": "00:00", "temperature": 20, "humidity": 60},
    {"timestamp": "2024-01-05T00:00:00Z", "time": "05/01", "temperature": 24},
    {"time": "08:00", "humidity": 55},
    {"timestamp": "2024-01-06T00:00:00Z", "time": "06/01", "temperature": 22, "humidity": 40},
]


@pytest.fixture()
def dashboard() -> DashboardService:
    service = DashboardService(source=StaticDataSource(RAW))
    asyncio.run(service.load())
    return service


def test_load_sanitizes_once(dashboard: DashboardService) -> None:
    status = dashboard.status()

    assert status.loaded
    assert status.entry_count == 4
    assert status.reading_count == 3
    assert status.dropped_count == 1
    assert status.error is None

    asyncio.run(dashboard.load())
    assert dashboard.source.calls == 1


def test_render_filters_and_extracts(dashboard: DashboardService) -> None:
    view = dashboard.render(DashboardSelection(TimeWindow.last_24_hours, VariableKey.humidity))

    assert view.series.labels == ("05/01", "06/01")
    assert view.series.values == (0.0, 40.0)
    assert view.reading_count == 2
    assert view.anchor == datetime(2024, 1, 6, tzinfo=timezone.utc)
    assert view.lower_bound == datetime(2024, 1, 5, tzinfo=timezone.utc)


def test_changing_window_keeps_anchor_and_snapshot(dashboard: DashboardService) -> None:
    selection = DashboardSelection()
    before = dashboard.readings

    day = dashboard.render(selection)
    everything = dashboard.render(selection.with_window(TimeWindow.all))

    assert day.anchor == everything.anchor
    assert day.series.labels == ("05/01", "06/01")
    assert everything.series.labels == ("00:00", "05/01", "06/01")
    assert everything.lower_bound is None
    assert dashboard.readings is before


def test_selection_changes_return_new_values() -> None:
    selection = DashboardSelection()

    changed = selection.with_window("30d").with_variable("co2")

    assert selection == DashboardSelection(TimeWindow.last_24_hours, VariableKey.temperature)
    assert changed == DashboardSelection(TimeWindow.last_30_days, VariableKey.co2)
    assert selection.with_window("forever").window is TimeWindow.all
    with pytest.raises(ValueError):
        selection.with_variable("pressure")


def test_fetch_failure_leaves_empty_snapshot() -> None:
    service = DashboardService(source=StaticDataSource(error=FetchError("HTTP 500", 500)))

    status = asyncio.run(service.load())
    view = service.render(DashboardSelection())

    assert status.loaded
    assert status.error == "HTTP 500"
    assert status.reading_count == 0
    assert view.series.degenerate
    assert view.anchor is None


def test_reload_replaces_snapshot_after_failure() -> None:
    source = StaticDataSource(error=FetchError("offline"))
    service = DashboardService(source=source)
    asyncio.run(service.load())

    source.error = None
    source.entries = RAW
    status = asyncio.run(service.reload())

    assert status.error is None
    assert status.reading_count == 3
    assert source.calls == 2


def test_non_list_payload_renders_degenerate_series() -> None:
    service = DashboardService(source=StaticDataSource({"error": "maintenance"}))
    status = asyncio.run(service.load())

    assert status.error is None
    assert status.reading_count == 0
    assert service.render(DashboardSelection()).series.degenerate


def test_sort_by_time_orders_points() -> None:
    raw = list(reversed(RAW))
    unsorted = DashboardService(source=StaticDataSource(raw))
    ordered = DashboardService(source=StaticDataSource(raw), sort_by_time=True)
    asyncio.run(unsorted.load())
    asyncio.run(ordered.load())
    selection = DashboardSelection(window=TimeWindow.all)

    assert unsorted.render(selection).series.labels == ("06/01", "05/01", "00:00")
    assert ordered.render(selection).series.labels == ("00:00", "05/01", "06/01")
