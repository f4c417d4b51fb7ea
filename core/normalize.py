from __future__ import annotations

import hashlib
import logging
import math
import re
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Tuple

from core.headers import normalize_header, resolve_field
from core.models import Availability, CatalogEntry, CellValue


logger = logging.getLogger(__name__)

DEFAULT_NAME = "Unknown Medicine"
DEFAULT_CATEGORY = "Uncategorized"

TRUE_TOKENS = frozenset({"1", "true", "yes", "y"})

_NUMBER_CHARS = re.compile(r"[^\d.\-]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


# ---------------- Cell coercion ----------------
def cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def parse_number(value: object, fallback: float = 0.0) -> float:
    """'$1,234.50' -> 1234.5; anything unparseable -> fallback."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        out = float(value)
        return out if math.isfinite(out) else fallback
    s = _NUMBER_CHARS.sub("", cell_text(value))
    match = _LEADING_FLOAT.match(s)
    if not match:
        return fallback
    out = float(match.group(0))
    return out if math.isfinite(out) else fallback


def parse_stock(value: object) -> int:
    return max(0, math.floor(parse_number(value, 0.0)))


def classify_availability(value: object) -> Availability:
    # "low" is checked before "out": "Low - running out" is LowStock.
    text = cell_text(value).lower()
    if "low" in text:
        return Availability.LOW_STOCK
    if "out" in text:
        return Availability.OUT_OF_STOCK
    return Availability.IN_STOCK


def parse_flag(value: object) -> bool:
    return cell_text(value).lower() in TRUE_TOKENS


def split_list(value: object) -> Tuple[str, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, (list, tuple)):
        pieces: Iterable[object] = value
    else:
        pieces = str(value).split(",")
    return tuple(s for s in (cell_text(p) for p in pieces) if s)


def slugify(text: str) -> str:
    return _SLUG_CHARS.sub("-", text.lower()).strip("-")


def derive_entry_id(name: str, manufacturer: str, dosage: str) -> str:
    """Stable id for rows without an explicit id column.

    Same name/manufacturer/dosage gives the same id on every reload.
    """
    basis = "|".join(normalize_header(p) for p in (name, manufacturer, dosage))
    digest = hashlib.sha1(basis.encode("utf-8")).hexdigest()[:8]
    slug = slugify(name) or "item"
    return f"{slug}-{digest}"


# ---------------- Row -> entry ----------------
def _get(row: Mapping[str, CellValue], field_name: str) -> CellValue:
    header = resolve_field(row, field_name)
    if header is None:
        return ""
    value = row[header]
    return "" if value is None else value


def normalize_row(row: Mapping[str, CellValue]) -> CatalogEntry:
    row = row or {}
    name = cell_text(_get(row, "name")) or DEFAULT_NAME
    manufacturer = cell_text(_get(row, "manufacturer"))
    dosage = cell_text(_get(row, "dosage"))

    explicit_id = cell_text(_get(row, "id"))
    entry_id = explicit_id or derive_entry_id(name, manufacturer, dosage)

    return CatalogEntry(
        id=entry_id,
        name=name,
        generic_name=cell_text(_get(row, "generic_name")),
        brand=cell_text(_get(row, "brand")),
        category=cell_text(_get(row, "category")) or DEFAULT_CATEGORY,
        manufacturer=manufacturer,
        description=cell_text(_get(row, "description")),
        dosage=dosage,
        form=cell_text(_get(row, "form")),
        price=parse_number(_get(row, "price"), 0.0),
        stock=parse_stock(_get(row, "stock")),
        availability=classify_availability(_get(row, "availability")),
        prescription_required=parse_flag(_get(row, "prescription_required")),
        image_ref=cell_text(_get(row, "image_ref")) or None,
        uses=split_list(_get(row, "uses")),
        side_effects=split_list(_get(row, "side_effects")),
        contraindications=split_list(_get(row, "contraindications")),
        extra=dict(row),
    )


def normalize_rows(rows: Iterable[Mapping[str, CellValue]]) -> List[CatalogEntry]:
    """Normalize a whole sheet.

    Derived ids are suffixed (-2, -3, ...) to stay unique within the result;
    ids taken from an id column are kept verbatim.
    """
    entries: List[CatalogEntry] = []
    seen: Dict[str, int] = {}
    for row in rows:
        entry = normalize_row(row)
        if cell_text(_get(row or {}, "id")):
            seen.setdefault(entry.id, 1)
            entries.append(entry)
            continue
        count = seen.get(entry.id, 0) + 1
        seen[entry.id] = count
        if count > 1:
            new_id = f"{entry.id}-{count}"
            while new_id in seen:
                count += 1
                new_id = f"{entry.id}-{count}"
            seen[new_id] = 1
            logger.debug("duplicate id %s renamed to %s", entry.id, new_id)
            entry = replace(entry, id=new_id)
        entries.append(entry)
    return entries
