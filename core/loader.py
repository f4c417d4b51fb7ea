"""
Catalog load orchestration: cache -> source -> fallback.

Only one load runs per loader. Starting a new one (including a manual
refresh) cancels the one in flight; the superseded call returns ``None`` and
never touches the cache or the published entries. The cache is consulted
before any network activity and a hit short-circuits the fetch.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from core.cache import CatalogCache
from core.config import FALLBACK_ADVISORY
from core.errors import CatalogError
from core.fallback import FALLBACK_ENTRIES
from core.models import CatalogEntry
from core.normalize import normalize_rows
from core.sources import RowSource


logger = logging.getLogger(__name__)

ORIGIN_CACHE = "cache"
ORIGIN_NETWORK = "network"
ORIGIN_FALLBACK = "fallback"


@dataclass(frozen=True)
class LoadResult:
    entries: Tuple[CatalogEntry, ...]
    origin: str
    advisory: Optional[str] = None


class CatalogLoader:
    def __init__(
        self,
        source: RowSource,
        cache: CatalogCache,
        fallback: Sequence[CatalogEntry] = FALLBACK_ENTRIES,
    ):
        self.source = source
        self.cache = cache
        self.fallback: Tuple[CatalogEntry, ...] = tuple(fallback)
        self.result: Optional[LoadResult] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def entries(self) -> Tuple[CatalogEntry, ...]:
        return self.result.entries if self.result is not None else self.fallback

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    async def load(self, *, force: bool = False) -> Optional[LoadResult]:
        self.cancel()
        task = asyncio.ensure_future(self._load(force=force))
        self._task = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._task is task:
                raise
            logger.debug("Catalog load superseded")
            return None
        finally:
            if self._task is task:
                self._task = None

    async def refresh(self) -> Optional[LoadResult]:
        self.cache.invalidate()
        return await self.load(force=True)

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    close = cancel

    async def _load(self, *, force: bool) -> LoadResult:
        if not force:
            cached = self.cache.read()
            if cached is not None:
                logger.info("Loaded %d entries from cache %s", len(cached), self.cache.key)
                return self._publish(LoadResult(tuple(cached), ORIGIN_CACHE))

        try:
            rows = await self.source.fetch_rows()
            entries = normalize_rows(rows)
        except CatalogError as e:
            logger.warning("Failed to load catalog from %s: %s", self.source.cache_key, e)
            return self._publish(LoadResult(self.fallback, ORIGIN_FALLBACK, FALLBACK_ADVISORY))
        except Exception:
            logger.exception("Unexpected error loading catalog from %s", self.source.cache_key)
            return self._publish(LoadResult(self.fallback, ORIGIN_FALLBACK, FALLBACK_ADVISORY))

        if not entries:
            logger.info("Source %s returned no rows; showing fallback dataset", self.source.cache_key)
            return self._publish(LoadResult(self.fallback, ORIGIN_FALLBACK))

        self.cache.write(entries)
        logger.info("Loaded %d entries from %s", len(entries), self.source.cache_key)
        return self._publish(LoadResult(tuple(entries), ORIGIN_NETWORK))

    def _publish(self, result: LoadResult) -> LoadResult:
        self.result = result
        return result
