from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from models.records import TimeWindow, VariableKey


DEFAULT_DATA_URL = (
    "https://raw.githubusercontent.com/Thitareeee/mock-senser-data/main/"
    "sensor_mock_data_varied_errors.json"
)

_DATA_URL_ENV = "SENSOR_DATA_URL"
_FETCH_TIMEOUT_ENV = "SENSOR_FETCH_TIMEOUT"
_DEFAULT_WINDOW_ENV = "DASHBOARD_DEFAULT_WINDOW"
_DEFAULT_VARIABLE_ENV = "DASHBOARD_DEFAULT_VARIABLE"
_SORT_BY_TIME_ENV = "SERIES_SORT_BY_TIME"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_url: str
    fetch_timeout: float
    default_window: TimeWindow
    default_variable: VariableKey
    sort_by_time: bool
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: float) -> float:
    value = os.getenv(_FETCH_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_window(default: TimeWindow) -> TimeWindow:
    value = os.getenv(_DEFAULT_WINDOW_ENV)
    if value is None or not value.strip():
        return default
    return TimeWindow.parse(value.strip())


def _read_variable(default: VariableKey) -> VariableKey:
    value = os.getenv(_DEFAULT_VARIABLE_ENV)
    if value is None:
        return default
    try:
        return VariableKey(value.strip())
    except ValueError:
        return default


def _read_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if not candidate:
        return default
    return candidate in _TRUTHY


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        data_url=_read_str_env(_DATA_URL_ENV, DEFAULT_DATA_URL),
        fetch_timeout=_read_timeout(10.0),
        default_window=_read_window(TimeWindow.last_24_hours),
        default_variable=_read_variable(VariableKey.temperature),
        sort_by_time=_read_flag(_SORT_BY_TIME_ENV, False),
        log_level=_read_log_level("INFO"),
    )
