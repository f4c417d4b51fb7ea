from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import numpy as np
import pandas as pd

from core.models import CatalogEntry, CellValue, Row


EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}

EXPORT_COLUMNS = [
    "id",
    "name",
    "generic_name",
    "brand",
    "category",
    "manufacturer",
    "dosage",
    "form",
    "price",
    "stock",
    "availability",
    "prescription_required",
    "uses",
    "side_effects",
    "contraindications",
]


def to_cell_value(value: object) -> CellValue:
    if value is None or (not isinstance(value, (list, tuple)) and pd.isna(value)):
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def frame_to_rows(df: pd.DataFrame) -> List[Row]:
    """Plain {header: cell} rows from a sheet frame, blank rows dropped."""
    if df.empty:
        return []
    df = df.dropna(how="all")
    headers = [str(c).strip() if not str(c).startswith("Unnamed:") else f"col{i}" for i, c in enumerate(df.columns)]
    rows: List[Row] = []
    for values in df.itertuples(index=False, name=None):
        rows.append({h: to_cell_value(v) for h, v in zip(headers, values)})
    return rows


def read_table_file(path: Path, sheet_name: str | int = 0) -> List[Row]:
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")
    if path.suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl")
    else:
        df = pd.read_csv(path, encoding="utf-8-sig")
    return frame_to_rows(df)


def entries_to_frame(entries: Iterable[CatalogEntry]) -> pd.DataFrame:
    records = []
    for entry in entries:
        rec = entry.to_dict()
        for key in ("uses", "side_effects", "contraindications"):
            rec[key] = ", ".join(rec[key])
        records.append({c: rec[c] for c in EXPORT_COLUMNS})
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)
