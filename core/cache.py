"""
TTL-bounded snapshot cache for the normalized catalog.

A snapshot is stored as text::

    {"timestamp": <epoch millis>, "data": [<CatalogEntry.to_dict()>, ...]}

under a key derived from the source identity. Reads only trust a snapshot
while ``now - timestamp < ttl``; expired, unparseable or structurally
invalid records are removed and reported as a miss. Storage errors never
propagate out of the cache.
"""

from __future__ import annotations

import json
import logging
import math
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from core.models import CatalogEntry


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class CatalogCache:
    """read/write/invalidate over a single storage slot.

    Subclasses provide raw text storage through ``_load_raw``/``_store_raw``/
    ``_delete_raw``.
    """

    def __init__(self, key: str, ttl_seconds: float, clock: Clock = time.time):
        self.key = key
        self.ttl_ms = int(round(ttl_seconds * 1000))
        self._clock = clock

    def _now_ms(self) -> int:
        return int(round(self._clock() * 1000))

    def _load_raw(self) -> Optional[str]:
        raise NotImplementedError

    def _store_raw(self, text: str) -> None:
        raise NotImplementedError

    def _delete_raw(self) -> None:
        raise NotImplementedError

    def read(self) -> Optional[List[CatalogEntry]]:
        try:
            raw = self._load_raw()
        except (OSError, ValueError) as e:
            logger.warning("Cache %s unreadable: %s", self.key, e)
            return None
        if raw is None:
            return None

        try:
            record = json.loads(raw)
            timestamp = record["timestamp"]
            data = record["data"]
            if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)) or not isinstance(data, list):
                raise ValueError("snapshot has the wrong shape")
            if not math.isfinite(timestamp) or timestamp > self._now_ms():
                raise ValueError(f"snapshot timestamp {timestamp!r} is not a past instant")
            entries = [CatalogEntry.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding corrupt cache snapshot %s: %s", self.key, e)
            self.invalidate()
            return None

        age_ms = self._now_ms() - timestamp
        if age_ms >= self.ttl_ms:
            logger.info("Cache snapshot %s expired (%d ms old)", self.key, age_ms)
            self.invalidate()
            return None
        return entries

    def write(self, entries: Sequence[CatalogEntry]) -> None:
        record = {"timestamp": self._now_ms(), "data": [e.to_dict() for e in entries]}
        try:
            self._store_raw(json.dumps(record, ensure_ascii=False, default=str))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not write cache snapshot %s: %s", self.key, e)

    def invalidate(self) -> None:
        try:
            self._delete_raw()
        except OSError as e:
            logger.warning("Could not clear cache snapshot %s: %s", self.key, e)


class FileCatalogCache(CatalogCache):
    def __init__(self, directory: Path, key: str, ttl_seconds: float, clock: Clock = time.time):
        super().__init__(key, ttl_seconds, clock)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def _load_raw(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def _store_raw(self, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(self.path)

    def _delete_raw(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryCatalogCache(CatalogCache):
    """Dict-backed cache; several instances may share one ``store``."""

    def __init__(self, key: str, ttl_seconds: float, clock: Clock = time.time, store: Optional[Dict[str, str]] = None):
        super().__init__(key, ttl_seconds, clock)
        self.store: Dict[str, str] = store if store is not None else {}

    def _load_raw(self) -> Optional[str]:
        return self.store.get(self.key)

    def _store_raw(self, text: str) -> None:
        self.store[self.key] = text

    def _delete_raw(self) -> None:
        self.store.pop(self.key, None)
