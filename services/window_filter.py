"""Relative time-window selection anchored to the newest reading."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Tuple, Union

from models.records import SensorReading, TimeWindow

logger = logging.getLogger(__name__)


def find_anchor(readings: Iterable[SensorReading]) -> Optional[datetime]:
    """Return the latest timestamp in ``readings``; never the wall-clock time."""
    return max((reading.timestamp for reading in readings), default=None)


def lower_bound(anchor: datetime, window: TimeWindow) -> Optional[datetime]:
    lookback = window.lookback
    if lookback is None:
        return None
    try:
        return anchor - lookback
    except OverflowError:
        # window reaches past datetime.min, so nothing is excluded
        return None


def resolve_window(window: Union[TimeWindow, str]) -> TimeWindow:
    resolved = TimeWindow.parse(window)
    if resolved is TimeWindow.all and window != TimeWindow.all.value:
        logger.warning(
            "Unsupported time window; showing all readings.",
            extra={"window": window},
        )
    return resolved


def filter_by_window(
    readings: Iterable[SensorReading], window: Union[TimeWindow, str]
) -> Tuple[SensorReading, ...]:
    """Keep readings at or after ``anchor - lookback``, preserving order.

    Unknown windows are treated as ``TimeWindow.all``.
    """
    snapshot = tuple(readings)
    if not snapshot:
        return snapshot

    resolved = resolve_window(window)
    anchor = find_anchor(snapshot)
    bound = lower_bound(anchor, resolved) if anchor is not None else None
    if bound is None:
        return snapshot

    return tuple(reading for reading in snapshot if reading.timestamp >= bound)
