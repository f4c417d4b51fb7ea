from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Dict, Mapping, Optional


ALL = "all"

PRICE_BRACKETS = ("under-20", "20-50", "over-50")
SORT_KEYS = ("name", "price-low", "price-high", "availability")
DEFAULT_SORT = "name"

# criteria field -> URL query parameter mirrored for it
URL_PARAMS = {
    "query": "search",
    "category": "category",
    "manufacturer": "manufacturer",
}


@dataclass(frozen=True)
class FilterCriteria:
    query: str = ""
    category: str = ALL
    manufacturer: str = ALL
    price_bracket: str = ALL
    sort_key: str = DEFAULT_SORT

    def with_changes(self, **changes: object) -> "FilterCriteria":
        return normalize_criteria({**asdict(self), **changes})


def _choice(value: object) -> str:
    s = str(value).strip() if value is not None else ""
    return s or ALL


def normalize_criteria(raw: Mapping[str, object]) -> FilterCriteria:
    """Build criteria from loosely typed input (form data, request bodies).

    Missing or blank values mean "no constraint". An unknown price bracket is
    treated as unconstrained; an unknown sort key is kept and leaves the
    filtered order untouched.
    """
    query = raw.get("query")
    if query is None:
        query = raw.get("search")
    price_bracket = _choice(raw.get("price_bracket", raw.get("price")))
    if price_bracket not in PRICE_BRACKETS:
        price_bracket = ALL
    sort_key = str(raw.get("sort_key", raw.get("sort")) or "").strip() or DEFAULT_SORT

    return FilterCriteria(
        query=str(query or "").strip(),
        category=_choice(raw.get("category")),
        manufacturer=_choice(raw.get("manufacturer")),
        price_bracket=price_bracket,
        sort_key=sort_key,
    )


# ---------------- URL state ----------------
def apply_param(params: Mapping[str, str], key: str, value: Optional[str]) -> Dict[str, str]:
    """Return a copy of ``params`` with ``key`` set, or removed when cleared.

    A blank value or the "all" sentinel removes the key; it is never left
    behind as an empty string.
    """
    out = dict(params)
    value = (value or "").strip()
    if value and value != ALL:
        out[key] = value
    else:
        out.pop(key, None)
    return out


def criteria_to_params(criteria: FilterCriteria, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    params: Dict[str, str] = dict(base or {})
    for field_name, param in URL_PARAMS.items():
        params = apply_param(params, param, getattr(criteria, field_name))
    return params


def criteria_from_params(params: Mapping[str, str], base: Optional[FilterCriteria] = None) -> FilterCriteria:
    """Read the mirrored parameters back; non-mirrored fields come from ``base``."""
    base = base or FilterCriteria()
    return replace(
        base,
        query=(params.get("search") or "").strip(),
        category=_choice(params.get("category")),
        manufacturer=_choice(params.get("manufacturer")),
    )
