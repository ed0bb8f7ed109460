"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from models.records import TimeWindow, VariableKey
from services.dashboard import DashboardStatus, DashboardView


class SelectionOption(BaseModel):
    """A selectable key paired with its display label."""

    key: str
    label: str


class OptionsResponse(BaseModel):
    title: str
    windows: List[SelectionOption]
    variables: List[SelectionOption]
    default_window: TimeWindow
    default_variable: VariableKey


class StatusResponse(BaseModel):
    """Outcome of the session's dataset fetch."""

    loaded: bool
    entry_count: int = Field(..., ge=0)
    reading_count: int = Field(..., ge=0)
    dropped_count: int = Field(..., ge=0)
    error: Optional[str] = None

    @classmethod
    def from_status(cls, status: DashboardStatus) -> "StatusResponse":
        return cls(
            loaded=status.loaded,
            entry_count=status.entry_count,
            reading_count=status.reading_count,
            dropped_count=status.dropped_count,
            error=status.error,
        )


class SeriesResponse(BaseModel):
    """Chart-ready series for one window and variable."""

    window: TimeWindow
    variable: VariableKey
    labels: List[str]
    values: List[float]
    degenerate: bool = Field(
        default=False, description="True when no readings matched and a zero point was substituted."
    )
    reading_count: int = Field(..., ge=0, description="Readings inside the window.")
    anchor: Optional[datetime] = None
    lower_bound: Optional[datetime] = None

    @classmethod
    def from_view(cls, view: DashboardView) -> "SeriesResponse":
        return cls(
            window=view.selection.window,
            variable=view.selection.variable,
            labels=list(view.series.labels),
            values=list(view.series.values),
            degenerate=view.series.degenerate,
            reading_count=view.reading_count,
            anchor=view.anchor,
            lower_bound=view.lower_bound,
        )
