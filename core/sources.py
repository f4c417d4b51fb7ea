"""
Row sources: where a catalog load gets its raw sheet rows from.

- GvizSheetSource: a published Google Sheet, fetched over HTTP and decoded
  with core.gviz.
- TableFileSource: a local XLSX/CSV export read through pandas.

Every source exposes ``cache_key`` so snapshots of distinct sources never
share a storage slot.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Protocol

import httpx

from core.config import GVIZ_URL_TEMPLATE, Settings, settings
from core.errors import FetchError
from core.gviz import decode_gviz
from core.models import Row
from core.tables import read_table_file


logger = logging.getLogger(__name__)

FetchText = Callable[[str], Awaitable[str]]


class RowSource(Protocol):
    cache_key: str

    async def fetch_rows(self) -> List[Row]:
        ...


class SheetFetcher:
    """Async "fetch text from URL" backed by a pooled httpx client."""

    DEFAULT_HEADERS = {
        "Accept": "application/json,text/javascript,*/*;q=0.8",
        "User-Agent": "medicine-catalog/0.1 (+httpx)",
    }

    def __init__(self, timeout: Optional[float] = None, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout or settings.request_timeout
        self._http_client = client

    async def __aenter__(self):
        self._client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self.DEFAULT_HEADERS,
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_text(self, url: str) -> str:
        try:
            response = await self._client().get(url)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timed out fetching {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e
        if response.is_error:
            raise FetchError(f"HTTP {response.status_code} from {url}")
        return response.text


class GvizSheetSource:
    def __init__(self, spreadsheet_id: str, gid: int = 0, fetch_text: Optional[FetchText] = None):
        self.spreadsheet_id = spreadsheet_id
        self.gid = gid
        self._fetch_text = fetch_text

    @property
    def url(self) -> str:
        return GVIZ_URL_TEMPLATE.format(spreadsheet_id=self.spreadsheet_id, gid=self.gid)

    @property
    def cache_key(self) -> str:
        return f"sheet_cache_{self.spreadsheet_id}_{self.gid}"

    async def fetch_rows(self) -> List[Row]:
        if self._fetch_text is not None:
            text = await self._fetch_text(self.url)
        else:
            async with SheetFetcher() as fetcher:
                text = await fetcher.fetch_text(self.url)
        rows = decode_gviz(text)
        logger.info("Decoded %d rows from sheet %s (gid=%s)", len(rows), self.spreadsheet_id, self.gid)
        return rows


class TableFileSource:
    def __init__(self, path: Path, sheet_name: str | int = 0):
        self.path = Path(path)
        self.sheet_name = sheet_name

    @property
    def cache_key(self) -> str:
        digest = hashlib.sha1(str(self.path.resolve()).encode("utf-8")).hexdigest()[:10]
        return f"file_cache_{self.path.stem}_{digest}_{self.sheet_name}"

    async def fetch_rows(self) -> List[Row]:
        try:
            rows = await asyncio.to_thread(read_table_file, self.path, self.sheet_name)
        except (OSError, ValueError) as e:
            raise FetchError(f"Cannot read catalog file {self.path}: {e}") from e
        logger.info("Read %d rows from %s", len(rows), self.path)
        return rows


def source_from_settings(cfg: Settings = settings, fetch_text: Optional[FetchText] = None) -> RowSource:
    if cfg.source_file:
        return TableFileSource(cfg.source_file)
    return GvizSheetSource(cfg.spreadsheet_id, cfg.sheet_gid, fetch_text=fetch_text)


def describe_source(source: RowSource) -> Dict[str, str]:
    if isinstance(source, GvizSheetSource):
        return {"kind": "gviz", "url": source.url, "cache_key": source.cache_key}
    if isinstance(source, TableFileSource):
        return {"kind": "file", "path": str(source.path), "cache_key": source.cache_key}
    return {"kind": type(source).__name__, "cache_key": source.cache_key}
