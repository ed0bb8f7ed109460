"""Projection of readings onto a single chartable variable."""

from __future__ import annotations

from typing import Iterable, Union

from models.records import SensorReading, Series, VariableKey

DEGENERATE_SERIES = Series(labels=("",), values=(0.0,), degenerate=True)


def extract_series(
    readings: Iterable[SensorReading],
    variable: Union[VariableKey, str],
    *,
    sort_by_time: bool = False,
) -> Series:
    """Build index-aligned labels and values for ``variable``.

    Readings keep their input order unless ``sort_by_time`` is set, in which
    case they are stably sorted by timestamp first. An empty projection is
    replaced by a single zero point so the chart always has data.
    """
    key = VariableKey(variable)
    ordered = list(readings)
    if sort_by_time:
        ordered.sort(key=lambda reading: reading.timestamp)

    labels: list[str] = []
    values: list[float] = []
    for reading in ordered:
        value = reading.value_of(key)
        if reading.time_label is None or value is None:
            continue
        labels.append(reading.time_label)
        values.append(value)

    if not values:
        return DEGENERATE_SERIES

    return Series(labels=tuple(labels), values=tuple(values))
