"""Dashboard session state over an immutable sanitized snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from functools import lru_cache
from typing import Optional, Tuple

from datasource.http_source import DataSource, build_default_source
from models.records import SensorReading, Series, TimeWindow, VariableKey
from services.extractor import extract_series
from services.sanitizer import SanitizationResult, sanitize_entries
from services.window_filter import find_anchor, filter_by_window, lower_bound
from settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSelection:
    """The only user-facing state: which window and which variable to show."""

    window: TimeWindow = TimeWindow.last_24_hours
    variable: VariableKey = VariableKey.temperature

    def with_window(self, window: TimeWindow | str) -> "DashboardSelection":
        return replace(self, window=TimeWindow.parse(window))

    def with_variable(self, variable: VariableKey | str) -> "DashboardSelection":
        return replace(self, variable=VariableKey(variable))


@dataclass(frozen=True)
class DashboardStatus:
    loaded: bool
    entry_count: int
    reading_count: int
    dropped_count: int
    error: Optional[str] = None


@dataclass(frozen=True)
class DashboardView:
    selection: DashboardSelection
    series: Series
    reading_count: int
    anchor: Optional[datetime]
    lower_bound: Optional[datetime]


class DashboardService:
    """Fetches once, sanitizes once, then answers selection changes purely."""

    def __init__(self, source: DataSource, sort_by_time: bool = False) -> None:
        self.source = source
        self.sort_by_time = sort_by_time
        self._sanitized = SanitizationResult()
        self._fetch_error: Optional[str] = None
        self._loaded = False

    @property
    def readings(self) -> Tuple[SensorReading, ...]:
        return self._sanitized.readings

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> DashboardStatus:
        """Fetch the dataset if it has not been fetched in this session."""
        if self._loaded:
            return self.status()
        return await self.reload()

    async def reload(self) -> DashboardStatus:
        """Refetch and replace the snapshot; a failure leaves it empty."""
        result = await self.source.fetch()
        if result.ok:
            self._sanitized = sanitize_entries(result.entries)
            self._fetch_error = None
        else:
            self._sanitized = SanitizationResult()
            self._fetch_error = result.error.reason if result.error else "unknown error"
        self._loaded = True
        return self.status()

    def status(self) -> DashboardStatus:
        return DashboardStatus(
            loaded=self._loaded,
            entry_count=self._sanitized.entry_count,
            reading_count=len(self._sanitized.readings),
            dropped_count=self._sanitized.dropped_count,
            error=self._fetch_error,
        )

    def render(self, selection: DashboardSelection) -> DashboardView:
        readings = self._sanitized.readings
        filtered = filter_by_window(readings, selection.window)
        series = extract_series(filtered, selection.variable, sort_by_time=self.sort_by_time)

        anchor = find_anchor(readings)
        bound = lower_bound(anchor, selection.window) if anchor is not None else None
        logger.debug(
            "Rendered dashboard view",
            extra={
                "window": selection.window.value,
                "variable": selection.variable.value,
                "reading_count": len(filtered),
            },
        )
        return DashboardView(
            selection=selection,
            series=series,
            reading_count=len(filtered),
            anchor=anchor,
            lower_bound=bound,
        )


def default_selection() -> DashboardSelection:
    settings = get_settings()
    return DashboardSelection(
        window=settings.default_window,
        variable=settings.default_variable,
    )


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard to the configured HTTP source."""
    settings = get_settings()
    return DashboardService(source=build_default_source(), sort_by_time=settings.sort_by_time)
