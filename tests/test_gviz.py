"""
Tests for the gviz response decoder.
"""

import json

import pytest

from core.errors import DecodeError
from core.gviz import column_headers, decode_gviz, table_to_rows, unwrap_jsonp


TABLE = {
    "version": "0.6",
    "status": "ok",
    "table": {
        "cols": [
            {"id": "A", "label": "Name", "type": "string"},
            {"id": "B", "label": "Price", "type": "number"},
            {"id": "C", "label": "", "type": "string"},
            {"id": "", "label": "", "type": "string"},
        ],
        "rows": [
            {"c": [{"v": "Paracetamol"}, {"v": 9.99, "f": "$9.99"}, {"v": "Low stock"}, {"v": "x"}]},
            {"c": [{"v": "Ibuprofen"}, None, {"v": None}]},
            {"c": [{"v": "Zinc (chelated)"}, {"v": 3}, {"v": "ok"}, None]},
        ],
    },
}


def wrap(payload):
    return "/*O_o*/\ngoogle.visualization.Query.setResponse(" + json.dumps(payload) + ");"


class TestUnwrapJsonp:
    def test_strips_wrapper(self):
        assert unwrap_jsonp(wrap({"status": "ok"})) == {"status": "ok"}

    def test_without_trailing_semicolon(self):
        text = "google.visualization.Query.setResponse(" + json.dumps({"a": 1}) + ")"
        assert unwrap_jsonp(text) == {"a": 1}

    def test_plain_json_is_accepted(self):
        assert unwrap_jsonp('{"note": "(parenthesised)"}') == {"note": "(parenthesised)"}

    @pytest.mark.parametrize("text", ["", "   ", "<html>Sign in</html>", "setResponse({broken);"])
    def test_malformed_raises(self, text):
        with pytest.raises(DecodeError):
            unwrap_jsonp(text)


class TestColumnHeaders:
    def test_label_then_id_then_position(self):
        assert column_headers(TABLE["table"]["cols"]) == ["Name", "Price", "C", "col3"]

    def test_whitespace_label_falls_back(self):
        assert column_headers([{"label": "   ", "id": " B "}, {"label": "  "}]) == ["B", "col1"]

    def test_labels_are_trimmed(self):
        assert column_headers([{"label": " Generic Name "}]) == ["Generic Name"]


class TestTableToRows:
    def test_rows_in_source_order(self):
        rows = table_to_rows(TABLE)
        assert [r["Name"] for r in rows] == ["Paracetamol", "Ibuprofen", "Zinc (chelated)"]

    def test_formatted_value_preferred(self):
        rows = table_to_rows(TABLE)
        assert rows[0]["Price"] == "$9.99"
        assert rows[2]["Price"] == 3

    def test_missing_and_null_cells_are_empty_strings(self):
        rows = table_to_rows(TABLE)
        assert rows[1] == {"Name": "Ibuprofen", "Price": "", "C": "", "col3": ""}
        assert rows[2]["col3"] == ""

    def test_error_status_raises(self):
        payload = {"status": "error", "errors": [{"reason": "access_denied", "detailed_message": "Sheet is private"}]}
        with pytest.raises(DecodeError, match="Sheet is private"):
            table_to_rows(payload)

    @pytest.mark.parametrize("payload", [{"status": "ok"}, {"table": []}, {"table": {"cols": "abc", "rows": []}}])
    def test_missing_table_structure_raises(self, payload):
        with pytest.raises(DecodeError):
            table_to_rows(payload)

    def test_empty_table(self):
        assert table_to_rows({"table": {"cols": [{"label": "Name"}], "rows": []}}) == []


class TestDecodeGviz:
    def test_text_bytes_and_object_agree(self):
        text = wrap(TABLE)
        assert decode_gviz(text) == decode_gviz(text.encode("utf-8")) == decode_gviz(TABLE)

    def test_rejects_other_types(self):
        with pytest.raises(DecodeError):
            decode_gviz(None)
