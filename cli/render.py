from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_options(payload: Dict[str, Any]) -> None:
    echo_heading(payload.get("title") or "Options")
    typer.echo()
    echo_heading("Time windows")
    for option in payload.get("windows") or []:
        marker = "*" if option.get("key") == payload.get("default_window") else " "
        typer.echo(f" {marker} {option.get('key'):<12} {option.get('label')}")
    typer.echo()
    echo_heading("Variables")
    for option in payload.get("variables") or []:
        marker = "*" if option.get("key") == payload.get("default_variable") else " "
        typer.echo(f" {marker} {option.get('key'):<12} {option.get('label')}")


def render_status(payload: Dict[str, Any]) -> None:
    echo_heading("Dataset Status")
    echo_key_values(
        [
            ("loaded", payload.get("loaded")),
            ("entry_count", payload.get("entry_count")),
            ("reading_count", payload.get("reading_count")),
            ("dropped_count", payload.get("dropped_count")),
        ]
    )
    error = payload.get("error")
    if error:
        typer.secho(f"error: {error}", fg=typer.colors.RED)


def render_series(payload: Dict[str, Any]) -> None:
    echo_heading("Series")
    echo_key_values(
        [
            ("window", payload.get("window")),
            ("variable", payload.get("variable")),
            ("anchor", payload.get("anchor")),
            ("lower_bound", payload.get("lower_bound")),
            ("reading_count", payload.get("reading_count")),
        ]
    )

    typer.echo()
    echo_heading("Points")
    if payload.get("degenerate"):
        typer.echo("No readings in this window.")
        return
    labels = payload.get("labels") or []
    values = payload.get("values") or []
    for label, value in zip(labels, values):
        typer.echo(f"  {label:<20} {value:g}")
