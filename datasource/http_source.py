from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Protocol

import httpx

from settings import get_settings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The data source did not return usable data."""

    def __init__(self, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


@dataclass(frozen=True)
class FetchResult:
    entries: Any = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, entries: Any) -> "FetchResult":
        return cls(entries=entries)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)


class DataSource(Protocol):
    async def fetch(self) -> FetchResult: ...


class HttpDataSource:
    """Fetches the full raw dataset with a single GET request."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._client = client

    async def fetch(self) -> FetchResult:
        try:
            if self._client is not None:
                response = await self._client.get(self.url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            return self._fail(FetchError(f"HTTP {status_code}", status_code=status_code))
        except httpx.HTTPError as exc:
            return self._fail(FetchError(str(exc) or type(exc).__name__))

        try:
            payload = response.json()
        except ValueError:
            return self._fail(FetchError("invalid JSON", status_code=response.status_code))
        return FetchResult.success(payload)

    def _fail(self, error: FetchError) -> FetchResult:
        logger.error(
            "Error fetching sensor data",
            extra={
                "source_url": self.url,
                "reason": error.reason,
                "status_code": error.status_code,
            },
        )
        return FetchResult.failure(error)


class FileDataSource:
    """Reads a raw dataset from a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    async def fetch(self) -> FetchResult:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            error = FetchError(f"cannot read {self.path}: {exc.strerror or exc}")
        except UnicodeDecodeError:
            error = FetchError("not UTF-8")
        except json.JSONDecodeError:
            error = FetchError("invalid JSON")
        else:
            return FetchResult.success(payload)
        logger.error(
            "Error reading sensor data file",
            extra={"source_url": str(self.path), "reason": error.reason},
        )
        return FetchResult.failure(error)


class StaticDataSource:
    """In-memory source returning a fixed payload or error."""

    def __init__(self, entries: Any = None, error: Optional[FetchError] = None) -> None:
        self.entries = entries
        self.error = error
        self.calls = 0

    async def fetch(self) -> FetchResult:
        self.calls += 1
        if self.error is not None:
            return FetchResult.failure(self.error)
        return FetchResult.success(self.entries)


@lru_cache
def build_default_source(url: Optional[str] = None) -> HttpDataSource:
    settings = get_settings()
    source_url = settings.data_url if url is None else url
    return HttpDataSource(url=source_url, timeout=settings.fetch_timeout)
