from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


# Cell values as they come off a sheet; coercion happens in core.normalize.
CellValue = Union[str, int, float, bool, None]
Row = Dict[str, CellValue]


class Availability(str, Enum):
    IN_STOCK = "InStock"
    LOW_STOCK = "LowStock"
    OUT_OF_STOCK = "OutOfStock"

    @property
    def label(self) -> str:
        return {
            Availability.IN_STOCK: "In Stock",
            Availability.LOW_STOCK: "Low Stock",
            Availability.OUT_OF_STOCK: "Out of Stock",
        }[self]


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str


CATEGORIES: Tuple[Category, ...] = (
    Category("antibiotics", "Antibiotics", "💊"),
    Category("painkillers", "Pain Relief", "🩹"),
    Category("vitamins", "Vitamins & Supplements", "🌟"),
    Category("cardiac", "Cardiac Care", "❤️"),
    Category("respiratory", "Respiratory", "🫁"),
    Category("diabetes", "Diabetes Care", "🩺"),
    Category("digestive", "Digestive Health", "🥗"),
    Category("skincare", "Dermatology", "🧴"),
)

CATEGORIES_BY_ID: Dict[str, Category] = {c.id: c for c in CATEGORIES}


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str
    generic_name: str = ""
    brand: str = ""
    category: str = "Uncategorized"
    manufacturer: str = ""
    description: str = ""
    dosage: str = ""
    form: str = ""
    price: float = 0.0
    stock: int = 0
    availability: Availability = Availability.IN_STOCK
    prescription_required: bool = False
    image_ref: Optional[str] = None
    uses: Tuple[str, ...] = ()
    side_effects: Tuple[str, ...] = ()
    contraindications: Tuple[str, ...] = ()
    extra: Dict[str, CellValue] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["availability"] = self.availability.value
        for key in ("uses", "side_effects", "contraindications"):
            out[key] = list(out[key])
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CatalogEntry":
        """Rebuild an entry from ``to_dict`` output.

        Raises KeyError/TypeError/ValueError on structurally invalid input;
        callers reading untrusted storage treat that as a miss.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"entry must be a mapping, got {type(data).__name__}")
        extra = data.get("extra") or {}
        if not isinstance(extra, Mapping):
            raise TypeError("entry.extra must be a mapping")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            generic_name=str(data.get("generic_name", "")),
            brand=str(data.get("brand", "")),
            category=str(data.get("category", "Uncategorized")),
            manufacturer=str(data.get("manufacturer", "")),
            description=str(data.get("description", "")),
            dosage=str(data.get("dosage", "")),
            form=str(data.get("form", "")),
            price=float(data.get("price", 0.0)),
            stock=int(data.get("stock", 0)),
            availability=Availability(data.get("availability", Availability.IN_STOCK.value)),
            prescription_required=bool(data.get("prescription_required", False)),
            image_ref=data.get("image_ref") or None,
            uses=_str_tuple(data.get("uses")),
            side_effects=_str_tuple(data.get("side_effects")),
            contraindications=_str_tuple(data.get("contraindications")),
            extra=dict(extra),
        )


def _str_tuple(values: Optional[List[Any]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        raise TypeError("list field must be a sequence")
    return tuple(str(v) for v in values)


def category_for(entry: CatalogEntry) -> Optional[Category]:
    return CATEGORIES_BY_ID.get(entry.category)
