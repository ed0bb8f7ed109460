"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterator, Mapping, Optional, Tuple


class TimeWindow(str, Enum):
    """Relative windows counted back from the newest reading in a dataset."""

    last_24_hours = "24h"
    last_7_days = "7d"
    last_30_days = "30d"
    all = "all"

    @property
    def lookback(self) -> Optional[timedelta]:
        return _LOOKBACKS[self]

    @classmethod
    def parse(cls, value: object) -> "TimeWindow":
        """Resolve ``value`` to a window, falling back to ``all`` when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.all


_LOOKBACKS: dict[TimeWindow, Optional[timedelta]] = {
    TimeWindow.last_24_hours: timedelta(hours=24),
    TimeWindow.last_7_days: timedelta(days=7),
    TimeWindow.last_30_days: timedelta(days=30),
    TimeWindow.all: None,
}


class VariableKey(str, Enum):
    """Measured variables carried by every sanitized reading."""

    temperature = "temperature"
    humidity = "humidity"
    vpo = "vpo"
    dew_point = "dewPoint"
    ec = "ec"
    ph = "pH"
    co2 = "co2"


@dataclass(frozen=True)
class SensorReading:
    """A single sanitized reading with a guaranteed UTC timestamp."""

    timestamp: datetime
    time_label: str
    values: Mapping[VariableKey, float] = field(default_factory=dict)

    def value_of(self, variable: VariableKey) -> Optional[float]:
        return self.values.get(variable)


SeriesPoint = Tuple[str, float]


@dataclass(frozen=True)
class Series:
    """Index-aligned labels and values handed to the chart renderer."""

    labels: Tuple[str, ...]
    values: Tuple[float, ...]
    degenerate: bool = False

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.values):
            raise ValueError("Series labels and values must have the same length.")

    def __len__(self) -> int:
        return len(self.values)

    def points(self) -> Iterator[SeriesPoint]:
        return iter(zip(self.labels, self.values))
