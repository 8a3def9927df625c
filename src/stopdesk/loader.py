"""Dataset loading.

Both datasets are static JSON files. A source is either:
- an http(s) URL, fetched with a single GET via `httpx`
- a local filesystem path

Each source is read exactly once per session. There is no retry/backoff: a
failed load is terminal for the session and surfaces as `DatasetLoadError`.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx

from .desks import DeskDirectory
from .errors import DatasetLoadError
from .gazetteer import CommuneIndex

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def fetch_json(
    source: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """Read and decode one JSON dataset.

    Args:
        source: http(s) URL or local file path.
        client: Optional shared client (tests inject one with a mock transport).
        timeout: Request timeout in seconds when no client is given.

    Returns:
        The decoded JSON value.
    """
    source_str = str(source)
    if not _is_url(source_str):
        return await asyncio.to_thread(_read_json_file, Path(source_str))

    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            return await _get_json(own_client, source_str)
    return await _get_json(client, source_str)


async def _get_json(client: httpx.AsyncClient, url: str) -> Any:
    logger.debug("GET %s", url)
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DatasetLoadError(url, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise DatasetLoadError(url, f"{type(e).__name__}: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise DatasetLoadError(url, "response is not valid JSON") from e


def _read_json_file(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise DatasetLoadError(str(path), f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        raise DatasetLoadError(str(path), "file is not valid JSON") from e


async def load_communes(
    source: str | Path, *, client: httpx.AsyncClient | None = None
) -> CommuneIndex:
    payload = await fetch_json(source, client=client)
    return CommuneIndex.from_payload(payload, source=str(source))


async def load_desks(
    source: str | Path, *, client: httpx.AsyncClient | None = None
) -> DeskDirectory:
    payload = await fetch_json(source, client=client)
    return DeskDirectory.from_payload(payload, source=str(source))


async def load_datasets(
    communes_source: str | Path,
    desks_source: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> tuple[CommuneIndex, DeskDirectory]:
    """Load both datasets concurrently.

    Either failure fails the whole load with the first `DatasetLoadError`.
    """
    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            return await load_datasets(
                communes_source, desks_source, client=own_client
            )

    tasks = [
        asyncio.ensure_future(load_communes(communes_source, client=client)),
        asyncio.ensure_future(load_desks(desks_source, client=client)),
    ]
    try:
        communes, desks = await asyncio.gather(*tasks)
    except BaseException:
        # The sibling fetch must not outlive the failed load (or its client).
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return communes, desks
