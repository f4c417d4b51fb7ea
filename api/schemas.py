from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class FilterCriteriaModel(BaseModel):
    query: str = ""
    category: str = "all"
    manufacturer: str = "all"
    price_bracket: str = "all"
    sort_key: str = "name"


class CategoryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    icon: str


class MedicineModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    generic_name: str
    brand: str
    category: str
    manufacturer: str
    description: str
    dosage: str
    form: str
    price: float
    stock: int
    availability: str
    prescription_required: bool
    image_ref: Optional[str] = None
    uses: List[str]
    side_effects: List[str]
    contraindications: List[str]
    extra: Dict[str, object] = {}


class CatalogResponse(BaseModel):
    source: str
    advisory: Optional[str] = None
    total: int
    medicines: List[MedicineModel]
    manufacturers: List[str]
    params: Dict[str, str]


class MedicineDetailResponse(BaseModel):
    medicine: MedicineModel
    category: Optional[CategoryModel] = None
    availability_label: str

