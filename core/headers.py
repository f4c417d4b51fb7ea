from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple


# Canonical field -> accepted header spellings. Matching goes through
# normalize_header, so case/spacing/punctuation variants need no entry.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "uid", "code"),
    "name": ("name", "medicine name", "drug", "product name"),
    "generic_name": ("generic name", "generic"),
    "brand": ("brand", "company", "marketer"),
    "category": ("category", "therapeutic category"),
    "manufacturer": ("manufacturer", "maker", "manufacturer name"),
    "description": ("description", "details", "notes"),
    "dosage": ("dosage", "strength"),
    "form": ("form", "dosage form", "type"),
    "price": ("price", "cost", "mrp"),
    "stock": ("stock", "quantity", "available"),
    "availability": ("availability", "status", "stock status"),
    "prescription_required": ("prescription", "rx required", "requires prescription", "rx"),
    "image_ref": ("image url", "image", "photo", "img"),
    "uses": ("uses", "indications"),
    "side_effects": ("side effects", "adverse effects"),
    "contraindications": ("contraindications", "contra indications", "contraindication"),
}

_NON_ALNUM = re.compile(r"[\W_]")


def normalize_header(value: object) -> str:
    """'Generic Name', 'generic_name' and 'GenericName' all become 'genericname'."""
    return _NON_ALNUM.sub("", str(value if value is not None else "")).lower()


def resolve_header(row: Mapping[str, object], aliases: Iterable[str]) -> Optional[str]:
    """Return the first header of ``row`` matching any alias, or None.

    Headers are scanned in row order, so when several headers normalize to
    the same key the first one wins.
    """
    wanted = {normalize_header(a) for a in aliases}
    wanted.discard("")
    for header in row or {}:
        if normalize_header(header) in wanted:
            return header
    return None


def resolve_field(row: Mapping[str, object], field_name: str) -> Optional[str]:
    return resolve_header(row, FIELD_ALIASES[field_name])
