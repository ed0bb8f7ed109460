"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.labels import DASHBOARD_TITLE, VARIABLE_LABELS, WINDOW_LABELS
from app.schemas import OptionsResponse, SelectionOption, SeriesResponse, StatusResponse
from models.records import VariableKey
from services.dashboard import DashboardService, build_default_dashboard, default_selection

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.get(
    "/api/options",
    response_model=OptionsResponse,
    summary="List selectable time windows and variables.",
)
async def list_options() -> OptionsResponse:
    selection = default_selection()
    return OptionsResponse(
        title=DASHBOARD_TITLE,
        windows=[
            SelectionOption(key=window.value, label=label)
            for window, label in WINDOW_LABELS.items()
        ],
        variables=[
            SelectionOption(key=variable.value, label=label)
            for variable, label in VARIABLE_LABELS.items()
        ],
        default_window=selection.window,
        default_variable=selection.variable,
    )


@router.get(
    "/api/status",
    response_model=StatusResponse,
    summary="Report the outcome of the dataset fetch.",
)
async def get_status(
    dashboard: DashboardService = Depends(get_dashboard),
) -> StatusResponse:
    return StatusResponse.from_status(dashboard.status())


@router.post(
    "/api/reload",
    response_model=StatusResponse,
    summary="Fetch the dataset again, replacing the current snapshot.",
)
async def reload_dataset(
    dashboard: DashboardService = Depends(get_dashboard),
) -> StatusResponse:
    return StatusResponse.from_status(await dashboard.reload())


@router.get(
    "/api/series",
    response_model=SeriesResponse,
    summary="Chart series for one time window and variable.",
)
async def get_series(
    window: Optional[str] = Query(
        None, description="24h, 7d, 30d or all. Unknown values show all readings."
    ),
    variable: Optional[VariableKey] = Query(None, description="Measured variable to plot."),
    dashboard: DashboardService = Depends(get_dashboard),
) -> SeriesResponse:
    selection = default_selection()
    if window is not None:
        selection = selection.with_window(window)
    if variable is not None:
        selection = selection.with_variable(variable)
    await dashboard.load()
    return SeriesResponse.from_view(dashboard.render(selection))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /ui for the dashboard."}
