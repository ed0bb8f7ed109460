from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the dashboard service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def get_options(self) -> Dict[str, Any]:
        return self._request("GET", "/api/options")

    def get_status(self) -> Dict[str, Any]:
        return self._request("GET", "/api/status")

    def reload(self) -> Dict[str, Any]:
        return self._request("POST", "/api/reload")

    def get_series(
        self, window: Optional[str] = None, variable: Optional[str] = None
    ) -> Dict[str, Any]:
        params = {
            key: value
            for key, value in (("window", window), ("variable", variable))
            if value is not None
        }
        return self._request("GET", "/api/series", params=params)

    def _request(
        self, method: str, path: str, params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.HTTPError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
