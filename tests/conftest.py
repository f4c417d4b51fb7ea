"""
Pytest configuration and fixtures for the catalog test suite.
"""

import asyncio

import pytest

from core.cache import MemoryCatalogCache
from core.models import Availability, CatalogEntry


class FakeClock:
    """Settable stand-in for time.time()."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource:
    """Row source returning canned rows (or raising) without any I/O."""

    def __init__(self, rows=None, error=None, cache_key="fake_source", delay=0.0):
        self.rows = rows or []
        self.error = error
        self.cache_key = cache_key
        self.delay = delay
        self.calls = 0

    async def fetch_rows(self):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return [dict(r) for r in self.rows]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_cache(clock):
    return MemoryCatalogCache("sheet_cache_test_0", ttl_seconds=3600, clock=clock)


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def make_entry():
    def _make(entry_id, name, **fields):
        return CatalogEntry(id=entry_id, name=name, **fields)

    return _make


@pytest.fixture
def sample_entries(make_entry):
    return [
        make_entry("1", "Ibuprofen", generic_name="Ibuprofen", brand="Brufen", category="painkillers",
                   manufacturer="Abbott", price=7.5, availability=Availability.LOW_STOCK),
        make_entry("2", "Paracetamol", generic_name="Acetaminophen", brand="Calpol", category="painkillers",
                   manufacturer="GSK", price=4.99),
        make_entry("3", "Nurofen Plus", generic_name="Ibuprofen/Codeine", brand="Nurofen", category="painkillers",
                   manufacturer="Reckitt", price=24.0, availability=Availability.OUT_OF_STOCK),
        make_entry("4", "Amoxicillin", generic_name="Amoxicillin", brand="Amoxil", category="antibiotics",
                   manufacturer="GSK", price=12.25),
        make_entry("5", "Advil Liqui-Gels", generic_name="Ibuprofen", brand="Advil", category="painkillers",
                   manufacturer="Pfizer", price=55.0),
        make_entry("6", "Insulin Glargine", generic_name="Insulin glargine", brand="Lantus", category="diabetes",
                   manufacturer="Sanofi", price=64.0),
    ]
