from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from core.filters import ALL, FilterCriteria
from core.models import CatalogEntry


def matches_query(entry: CatalogEntry, query: str) -> bool:
    q = (query or "").strip().lower()
    if not q:
        return True
    return q in entry.name.lower() or q in entry.generic_name.lower() or q in entry.brand.lower()


def matches_price(price: float, bracket: str) -> bool:
    if bracket == "under-20":
        return price < 20
    if bracket == "20-50":
        return 20 <= price <= 50
    if bracket == "over-50":
        return price > 50
    return True


def matches(entry: CatalogEntry, criteria: FilterCriteria) -> bool:
    if not matches_query(entry, criteria.query):
        return False
    if criteria.category != ALL and entry.category != criteria.category:
        return False
    if criteria.manufacturer != ALL and entry.manufacturer != criteria.manufacturer:
        return False
    return matches_price(entry.price, criteria.price_bracket)


# sort key -> (key function, descending). Availability compares the enum's
# string value literally, not by stock severity.
SORTERS: Dict[str, Tuple[Callable[[CatalogEntry], object], bool]] = {
    "name": (lambda e: e.name, False),
    "price-low": (lambda e: e.price, False),
    "price-high": (lambda e: e.price, True),
    "availability": (lambda e: e.availability.value, False),
}


def evaluate(entries: Iterable[CatalogEntry], criteria: Optional[FilterCriteria] = None) -> List[CatalogEntry]:
    """Filter and order ``entries``; ties keep their input order."""
    criteria = criteria or FilterCriteria()
    filtered = [e for e in entries if matches(e, criteria)]
    sorter = SORTERS.get(criteria.sort_key)
    if sorter is None:
        return filtered
    key, descending = sorter
    return sorted(filtered, key=key, reverse=descending)


def list_manufacturers(entries: Iterable[CatalogEntry]) -> List[str]:
    return sorted({e.manufacturer for e in entries if e.manufacturer})


def list_categories_in_use(entries: Iterable[CatalogEntry]) -> List[str]:
    return sorted({e.category for e in entries if e.category})


def find_entry(entries: Sequence[CatalogEntry], entry_id: str) -> Optional[CatalogEntry]:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    return None
