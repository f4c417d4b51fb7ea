"""
Tests for the cache -> source -> fallback load flow.
"""

import asyncio

import pytest

from core.cache import MemoryCatalogCache
from core.config import FALLBACK_ADVISORY
from core.errors import DecodeError, FetchError
from core.fallback import FALLBACK_ENTRIES
from core.loader import ORIGIN_CACHE, ORIGIN_FALLBACK, ORIGIN_NETWORK, CatalogLoader


ROWS = [
    {"Product Name": "Paracetamol", "Price": "$4.99", "Maker": "GSK"},
    {"Product Name": "Ibuprofen", "Price": "$7.50", "Status": "Low stock"},
]


class CountingCache(MemoryCatalogCache):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.writes = []

    def write(self, entries):
        self.writes.append(list(entries))
        super().write(entries)


@pytest.fixture
def cache(clock):
    return CountingCache("sheet_cache_test_0", 3600, clock=clock)


@pytest.mark.asyncio
async def test_network_load_normalizes_and_caches(fake_source, cache):
    source = fake_source(rows=ROWS)
    loader = CatalogLoader(source, cache)

    result = await loader.load()

    assert result.origin == ORIGIN_NETWORK
    assert result.advisory is None
    assert [e.name for e in result.entries] == ["Paracetamol", "Ibuprofen"]
    assert loader.entries == result.entries
    assert len(cache.writes) == 1
    assert cache.read() == list(result.entries)


@pytest.mark.asyncio
async def test_cache_hit_skips_source(fake_source, cache, make_entry):
    cached = [make_entry("c1", "Cached Zinc")]
    cache.write(cached)
    cache.writes.clear()
    source = fake_source(rows=ROWS)

    result = await CatalogLoader(source, cache).load()

    assert result.origin == ORIGIN_CACHE
    assert list(result.entries) == cached
    assert source.calls == 0
    assert cache.writes == []


@pytest.mark.asyncio
async def test_expired_cache_goes_to_source(fake_source, cache, clock, make_entry):
    cache.write([make_entry("old", "Old")])
    clock.advance(3600)
    source = fake_source(rows=ROWS)

    result = await CatalogLoader(source, cache).load()

    assert result.origin == ORIGIN_NETWORK
    assert source.calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [FetchError("HTTP 500"), DecodeError("bad envelope"), RuntimeError("boom")])
async def test_failure_falls_back_with_advisory(fake_source, cache, error):
    loader = CatalogLoader(fake_source(error=error), cache)

    result = await loader.load()

    assert result.origin == ORIGIN_FALLBACK
    assert result.advisory == FALLBACK_ADVISORY
    assert result.entries == FALLBACK_ENTRIES
    assert cache.writes == []
    assert cache.read() is None


@pytest.mark.asyncio
async def test_empty_source_shows_fallback_without_advisory(fake_source, cache):
    result = await CatalogLoader(fake_source(rows=[]), cache).load()

    assert result.origin == ORIGIN_FALLBACK
    assert result.advisory is None
    assert result.entries == FALLBACK_ENTRIES
    assert cache.writes == []


@pytest.mark.asyncio
async def test_refresh_bypasses_and_replaces_cache(fake_source, cache, make_entry):
    cache.write([make_entry("stale", "Stale")])
    source = fake_source(rows=ROWS)
    loader = CatalogLoader(source, cache)

    result = await loader.refresh()

    assert result.origin == ORIGIN_NETWORK
    assert source.calls == 1
    assert [e.name for e in cache.read()] == ["Paracetamol", "Ibuprofen"]


@pytest.mark.asyncio
async def test_failed_refresh_leaves_cache_empty(fake_source, cache, make_entry):
    cache.write([make_entry("stale", "Stale")])
    loader = CatalogLoader(fake_source(error=FetchError("offline")), cache)

    result = await loader.refresh()

    assert result.origin == ORIGIN_FALLBACK
    assert cache.read() is None


@pytest.mark.asyncio
async def test_new_load_supersedes_in_flight_load(fake_source, cache):
    slow = fake_source(rows=[{"name": "Slow"}], delay=0.2)
    loader = CatalogLoader(slow, cache)

    first = asyncio.ensure_future(loader.load())
    await asyncio.sleep(0.01)
    assert loader.loading

    slow.rows = [{"name": "Fresh"}]
    slow.delay = 0.0
    second = await loader.load(force=True)

    assert await first is None
    assert [e.name for e in second.entries] == ["Fresh"]
    assert [e.name for e in loader.entries] == ["Fresh"]
    assert len(cache.writes) == 1
    assert cache.writes[0][0].name == "Fresh"
    assert not loader.loading


@pytest.mark.asyncio
async def test_close_cancels_in_flight_load(fake_source, cache):
    loader = CatalogLoader(fake_source(rows=ROWS, delay=0.2), cache)

    pending = asyncio.ensure_future(loader.load())
    await asyncio.sleep(0.01)
    loader.close()

    assert await pending is None
    assert loader.result is None
    assert loader.entries == FALLBACK_ENTRIES
    assert cache.writes == []
