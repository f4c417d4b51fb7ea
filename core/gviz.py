"""
Google Visualization ("gviz") response -> plain row dicts.

The published-sheet endpoint answers with a JSONP envelope such as::

    /*O_o*/
    google.visualization.Query.setResponse({"version":"0.6","status":"ok","table":{...}});

The decoder knows nothing about the catalog schema: every row comes back as
``{header: cell value}`` in sheet order and can feed any consumer.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Union

from core.errors import DecodeError
from core.models import CellValue, Row


def unwrap_jsonp(text: str) -> Dict[str, Any]:
    raw = (text or "").strip()
    if not raw:
        raise DecodeError("Empty sheet response")

    if not raw.startswith("{"):
        start = raw.find("(")
        end = raw.rfind(")")
        if start == -1 or end <= start:
            raise DecodeError(f"Unrecognised response envelope: {raw[:80]!r}")
        raw = raw[start + 1 : end]

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Sheet response is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise DecodeError("Sheet response is not a JSON object")
    return payload


def column_headers(cols: List[Any]) -> List[str]:
    headers: List[str] = []
    for idx, col in enumerate(cols):
        col = col if isinstance(col, Mapping) else {}
        label = str(col.get("label") or "").strip()
        col_id = str(col.get("id") or "").strip()
        headers.append(label or col_id or f"col{idx}")
    return headers


def cell_value(cell: Any) -> CellValue:
    """Formatted value ('f') wins over the raw one ('v'); nulls become ''."""
    if not isinstance(cell, Mapping):
        return ""
    formatted = cell.get("f")
    if formatted is not None:
        return formatted
    value = cell.get("v")
    return "" if value is None else value


def _error_message(error: Any) -> str:
    if isinstance(error, Mapping):
        return str(error.get("detailed_message") or error.get("message") or error.get("reason") or error)
    return str(error)


def table_to_rows(payload: Mapping[str, Any]) -> List[Row]:
    """Convert the object passed to ``setResponse(...)`` into rows.

    Duplicate headers collapse into one key; the right-most column wins.
    """
    if payload.get("status") == "error":
        errors = payload.get("errors") or []
        detail = "; ".join(_error_message(e) for e in errors if e) or "unknown error"
        raise DecodeError(f"Sheet query failed: {detail}")

    table = payload.get("table")
    if not isinstance(table, Mapping):
        raise DecodeError("Sheet response has no table")

    cols = table.get("cols") or []
    rows = table.get("rows") or []
    if not isinstance(cols, list) or not isinstance(rows, list):
        raise DecodeError("Sheet table has malformed cols/rows")

    headers = column_headers(cols)
    out: List[Row] = []
    for r in rows:
        cells = r.get("c") if isinstance(r, Mapping) else None
        cells = cells if isinstance(cells, list) else []
        row: Row = {}
        for i, header in enumerate(headers):
            row[header] = cell_value(cells[i]) if i < len(cells) else ""
        out.append(row)
    return out


def decode_gviz(response: Union[str, bytes, Mapping[str, Any]]) -> List[Row]:
    if isinstance(response, bytes):
        response = response.decode("utf-8", errors="replace")
    payload = unwrap_jsonp(response) if isinstance(response, str) else response
    if not isinstance(payload, Mapping):
        raise DecodeError(f"Unsupported sheet response type: {type(payload).__name__}")
    return table_to_rows(payload)
