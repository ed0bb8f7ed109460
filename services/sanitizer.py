"""Normalization of raw sensor payloads into validated readings."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Tuple

from models.records import SensorReading, VariableKey

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"
DEFAULT_VALUE = 0.0

_TIMESTAMP_FIELD = "timestamp"
_LABEL_FIELD = "time"


@dataclass(frozen=True)
class SanitizationIssue:
    """A problem found while sanitizing; ``index`` is ``None`` for the whole payload."""

    index: Optional[int]
    reason: str


@dataclass(frozen=True)
class SanitizationResult:
    readings: Tuple[SensorReading, ...] = ()
    issues: Tuple[SanitizationIssue, ...] = ()
    entry_count: int = 0

    @property
    def dropped_count(self) -> int:
        return self.entry_count - len(self.readings)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError("Timestamp out of range") from exc


def _coerce_number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def sanitize_entry(
    entry: Mapping[str, Any], index: int, issues: List[SanitizationIssue]
) -> Optional[SensorReading]:
    """Build a reading from one raw entry, or return ``None`` when it must be dropped."""
    raw_timestamp = entry.get(_TIMESTAMP_FIELD)
    if raw_timestamp is None:
        issues.append(SanitizationIssue(index=index, reason="missing timestamp"))
        return None
    if not isinstance(raw_timestamp, str):
        issues.append(SanitizationIssue(index=index, reason="invalid timestamp"))
        return None
    try:
        timestamp = parse_timestamp(raw_timestamp)
    except ValueError:
        issues.append(SanitizationIssue(index=index, reason="invalid timestamp"))
        return None

    values: dict[VariableKey, float] = {}
    for variable in VariableKey:
        raw_value = entry.get(variable.value)
        number = _coerce_number(raw_value)
        if number is None:
            if raw_value is not None:
                issues.append(
                    SanitizationIssue(index=index, reason=f"invalid {variable.value} value")
                )
            number = DEFAULT_VALUE
        values[variable] = number

    label = entry.get(_LABEL_FIELD)
    time_label = label if isinstance(label, str) else UNKNOWN_LABEL

    return SensorReading(timestamp=timestamp, time_label=time_label, values=values)


def sanitize_entries(raw: Any) -> SanitizationResult:
    """Turn a raw fetched payload into ordered, validated sensor readings.

    Never raises on malformed input: a payload that is not a list yields an
    empty result with a single payload-level issue, entries without a usable
    timestamp are dropped, and missing or non-numeric measurements default
    to ``0``. Input order is preserved.
    """
    if not isinstance(raw, (list, tuple)):
        logger.warning(
            "Sensor payload is not a sequence; nothing to display.",
            extra={"reason": type(raw).__name__},
        )
        return SanitizationResult(
            issues=(SanitizationIssue(index=None, reason="payload is not a sequence"),),
        )

    readings: list[SensorReading] = []
    issues: list[SanitizationIssue] = []

    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            issues.append(SanitizationIssue(index=index, reason="entry is not an object"))
            continue
        reading = sanitize_entry(entry, index, issues)
        if reading is not None:
            readings.append(reading)

    for issue in issues:
        logger.debug(
            "Sanitizer issue",
            extra={"entry_index": issue.index, "reason": issue.reason},
        )

    result = SanitizationResult(
        readings=tuple(readings),
        issues=tuple(issues),
        entry_count=len(raw),
    )
    logger.info(
        "Sanitized sensor payload",
        extra={"reading_count": len(result.readings), "dropped_count": result.dropped_count},
    )
    return result
