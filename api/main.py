from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import (
    CatalogResponse,
    CategoryModel,
    FilterCriteriaModel,
    MedicineDetailResponse,
    MedicineModel,
)
from core.cache import CatalogCache, FileCatalogCache
from core.config import FALLBACK_ADVISORY, settings, setup_logging
from core.fallback import FALLBACK_ENTRIES
from core.filters import FilterCriteria, criteria_to_params, normalize_criteria
from core.loader import ORIGIN_FALLBACK, CatalogLoader, LoadResult
from core.models import CATEGORIES, CatalogEntry, category_for
from core.search import evaluate, find_entry, list_manufacturers
from core.sources import RowSource, describe_source, source_from_settings
from core.tables import entries_to_frame


setup_logging()

app = FastAPI(title="Medicine Catalog API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

SOURCE: RowSource = source_from_settings()
CACHE: CatalogCache = FileCatalogCache(settings.cache_dir, SOURCE.cache_key, settings.cache_ttl_seconds)


def _new_loader() -> CatalogLoader:
    # One loader per request: each request is its own "view", so concurrent
    # requests never supersede each other.
    return CatalogLoader(SOURCE, CACHE)


async def _load(*, refresh: bool = False) -> LoadResult:
    loader = _new_loader()
    result = await (loader.refresh() if refresh else loader.load())
    return result or LoadResult(FALLBACK_ENTRIES, ORIGIN_FALLBACK, FALLBACK_ADVISORY)


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with non-finite floats mapped to null."""

    def _safe_float(value: float) -> Optional[float]:
        return None if math.isnan(value) or math.isinf(value) else value

    return JSONResponse(status_code=status_code, content=jsonable_encoder(data, custom_encoder={float: _safe_float}))


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _medicine(entry: CatalogEntry) -> MedicineModel:
    return MedicineModel.model_validate(entry.to_dict())


def _catalog_payload(result: LoadResult, criteria: FilterCriteria) -> Dict[str, Any]:
    medicines = evaluate(result.entries, criteria)
    response = CatalogResponse(
        source=result.origin,
        advisory=result.advisory,
        total=len(medicines),
        medicines=[_medicine(m) for m in medicines],
        manufacturers=list_manufacturers(result.entries),
        params=criteria_to_params(criteria),
    )
    return response.model_dump()


@app.get("/health")
async def health():
    return {"status": "ok", "source": describe_source(SOURCE)}


@app.get("/meta/categories")
async def meta_categories():
    return _json({"categories": [CategoryModel.model_validate(c).model_dump() for c in CATEGORIES]})


@app.get("/meta/manufacturers")
async def meta_manufacturers():
    try:
        result = await _load()
        return _json({"manufacturers": list_manufacturers(result.entries)})
    except Exception as exc:
        logger.exception("meta_manufacturers failed")
        return _error(exc)


@app.get("/medicines")
async def medicines(
    search: str = Query(default=""),
    category: str = Query(default="all"),
    manufacturer: str = Query(default="all"),
    price: str = Query(default="all"),
    sort: str = Query(default="name"),
):
    try:
        criteria = normalize_criteria(
            {"search": search, "category": category, "manufacturer": manufacturer, "price": price, "sort": sort}
        )
        result = await _load()
        return _json(_catalog_payload(result, criteria))
    except Exception as exc:
        logger.exception("medicines failed")
        return _error(exc)


@app.post("/medicines/search")
async def medicines_search(filters: FilterCriteriaModel):
    try:
        criteria = normalize_criteria(filters.model_dump())
        result = await _load()
        return _json(_catalog_payload(result, criteria))
    except Exception as exc:
        logger.exception("medicines_search failed")
        return _error(exc)


@app.get("/medicines/{entry_id}")
async def medicine_detail(entry_id: str):
    try:
        result = await _load()
        entry = find_entry(result.entries, entry_id)
        if entry is None:
            return _json({"error": f"Medicine {entry_id!r} not found", "type": "NotFound"}, status_code=404)
        category = category_for(entry)
        detail = MedicineDetailResponse(
            medicine=_medicine(entry),
            category=CategoryModel.model_validate(category) if category else None,
            availability_label=entry.availability.label,
        )
        return _json(detail.model_dump())
    except Exception as exc:
        logger.exception("medicine_detail failed")
        return _error(exc)


@app.post("/refresh")
async def refresh():
    try:
        result = await _load(refresh=True)
        return _json({"source": result.origin, "advisory": result.advisory, "total": len(result.entries)})
    except Exception as exc:
        logger.exception("refresh failed")
        return _error(exc)


@app.get("/export")
async def export_catalog(
    search: str = Query(default=""),
    category: str = Query(default="all"),
    manufacturer: str = Query(default="all"),
    price: str = Query(default="all"),
    sort: str = Query(default="name"),
):
    criteria = normalize_criteria(
        {"search": search, "category": category, "manufacturer": manufacturer, "price": price, "sort": sort}
    )
    result = await _load()
    export_df = entries_to_frame(evaluate(result.entries, criteria))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=medicines.csv"},
    )
