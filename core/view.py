"""
Catalog page state without the rendering.

CatalogView keeps the criteria, the mirrored URL parameters and the loader
together: search text is debounced before it reaches the engine, category
and manufacturer changes apply at once, and every change is reflected in
``params`` (cleared values drop the key).
"""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from core.config import SEARCH_DEBOUNCE_SECONDS
from core.filters import ALL, FilterCriteria, apply_param, criteria_from_params
from core.loader import CatalogLoader, LoadResult
from core.models import CatalogEntry
from core.search import evaluate, list_manufacturers


T = TypeVar("T")


class Debouncer(Generic[T]):
    """Deliver only the last value pushed within ``delay`` seconds.

    Outside a running event loop values are delivered immediately.
    """

    def __init__(self, delay: float, callback: Callable[[T], None]):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._value: Optional[T] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.callback(value)
            return
        self._value = value
        self._handle = loop.call_later(self.delay, self._fire)

    def flush(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._value = None

    def _fire(self) -> None:
        value = self._value
        self._handle = None
        self._value = None
        self.callback(value)  # type: ignore[arg-type]


class CatalogView:
    def __init__(
        self,
        loader: CatalogLoader,
        params: Optional[Mapping[str, str]] = None,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ):
        self.loader = loader
        self.params: Dict[str, str] = dict(params or {})
        self.criteria: FilterCriteria = criteria_from_params(self.params)
        self.search_text = self.criteria.query
        self._debouncer: Debouncer[str] = Debouncer(debounce_seconds, self._apply_query)

    # ---------- loading ----------
    async def open(self) -> Optional[LoadResult]:
        return await self.loader.load()

    async def refresh(self) -> Optional[LoadResult]:
        return await self.loader.refresh()

    def close(self) -> None:
        self._debouncer.cancel()
        self.loader.close()

    @property
    def loading(self) -> bool:
        return self.loader.loading

    @property
    def advisory(self) -> Optional[str]:
        return self.loader.result.advisory if self.loader.result else None

    # ---------- criteria ----------
    def set_search(self, text: str) -> None:
        self.search_text = text or ""
        self.params = apply_param(self.params, "search", self.search_text)
        self._debouncer.push(self.search_text)

    def _apply_query(self, text: str) -> None:
        self.criteria = self.criteria.with_changes(query=text)

    def flush_search(self) -> None:
        self._debouncer.flush()

    def set_category(self, value: str) -> None:
        self.criteria = self.criteria.with_changes(category=value)
        self.params = apply_param(self.params, "category", value)

    def set_manufacturer(self, value: str) -> None:
        self.criteria = self.criteria.with_changes(manufacturer=value)
        self.params = apply_param(self.params, "manufacturer", value)

    def set_price_bracket(self, value: str) -> None:
        self.criteria = self.criteria.with_changes(price_bracket=value)

    def set_sort(self, value: str) -> None:
        self.criteria = self.criteria.with_changes(sort_key=value)

    def clear_filters(self) -> None:
        self._debouncer.cancel()
        self.search_text = ""
        self.criteria = FilterCriteria()
        self.params = {}

    # ---------- derived ----------
    def results(self) -> List[CatalogEntry]:
        return evaluate(self.loader.entries, self.criteria)

    def manufacturers(self) -> List[str]:
        return list_manufacturers(self.loader.entries)

    @property
    def has_active_filters(self) -> bool:
        c = self.criteria
        return bool(c.query) or any(v != ALL for v in (c.category, c.manufacturer, c.price_bracket))
