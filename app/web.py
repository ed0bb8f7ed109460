from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.labels import DASHBOARD_TITLE, VARIABLE_LABELS, WINDOW_LABELS
from services.dashboard import DashboardService, build_default_dashboard, default_selection


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    window: Optional[str] = None,
    variable: Optional[str] = None,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    selection = default_selection()
    if window:
        selection = selection.with_window(window)
    if variable:
        try:
            selection = selection.with_variable(variable)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Unsupported variable {variable!r}.",
            ) from exc

    await dashboard.load()
    view = dashboard.render(selection)
    return templates.TemplateResponse(
        request,
        "ui/dashboard.html",
        {
            "title": DASHBOARD_TITLE,
            "view": view,
            "status": dashboard.status(),
            "window_labels": WINDOW_LABELS,
            "variable_labels": VARIABLE_LABELS,
        },
    )


@router.post("/ui/reload", name="ui_reload")
async def ui_reload(
    dashboard: DashboardService = Depends(get_dashboard),
) -> RedirectResponse:
    await dashboard.reload()
    return RedirectResponse(url="/ui", status_code=status.HTTP_303_SEE_OTHER)
