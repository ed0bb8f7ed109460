from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from app.schemas import SeriesResponse, StatusResponse
from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_options, render_series, render_status
from datasource.http_source import FileDataSource
from models.records import VariableKey
from services.dashboard import DashboardService, default_selection


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for browsing sensor telemetry served by the dashboard service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_WINDOW_HELP = "Time window: 24h, 7d, 30d or all. Unknown values show all readings."


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("options")
def options_command(ctx: typer.Context) -> None:
    """List selectable time windows and variables."""
    state = _get_state(ctx)
    render_options(state.client.get_options())


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show whether the service fetched its dataset and how much survived."""
    state = _get_state(ctx)
    render_status(state.client.get_status())


@app.command("reload")
def reload_command(ctx: typer.Context) -> None:
    """Ask the service to fetch its dataset again."""
    state = _get_state(ctx)
    payload = state.client.reload()
    render_status(payload)
    if payload.get("error"):
        raise typer.Exit(code=1)


@app.command("series")
def series_command(
    ctx: typer.Context,
    window: Optional[str] = typer.Option(None, "--window", "-w", help=_WINDOW_HELP),
    variable: Optional[VariableKey] = typer.Option(
        None, "--variable", "-v", help="Measured variable to plot."
    ),
) -> None:
    """Fetch a chart series from the service."""
    state = _get_state(ctx)
    payload = state.client.get_series(
        window=window,
        variable=variable.value if variable is not None else None,
    )
    render_series(payload)


@app.command("inspect")
def inspect_command(
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Path to a JSON sensor dump."
    ),
    window: Optional[str] = typer.Option(None, "--window", "-w", help=_WINDOW_HELP),
    variable: Optional[VariableKey] = typer.Option(
        None, "--variable", "-v", help="Measured variable to plot."
    ),
    sort: bool = typer.Option(
        False,
        "--sort/--no-sort",
        help="Order points by timestamp instead of file order.",
    ),
) -> None:
    """Run the dashboard pipeline locally on a JSON file."""
    dashboard = DashboardService(source=FileDataSource(file), sort_by_time=sort)
    status = asyncio.run(dashboard.load())
    render_status(StatusResponse.from_status(status).model_dump(mode="json"))
    if status.error:
        raise typer.Exit(code=1)

    selection = default_selection()
    if window is not None:
        selection = selection.with_window(window)
    if variable is not None:
        selection = selection.with_variable(variable)

    typer.echo()
    view = dashboard.render(selection)
    render_series(SeriesResponse.from_view(view).model_dump(mode="json"))
