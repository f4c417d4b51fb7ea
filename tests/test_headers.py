"""
Tests for header normalization and alias resolution.
"""

import pytest

from core.headers import FIELD_ALIASES, normalize_header, resolve_field, resolve_header


class TestNormalizeHeader:
    @pytest.mark.parametrize(
        "header",
        ["Generic Name", "generic_name", "GenericName", "GENERIC-NAME", "  generic.name  ", "Generic__Name"],
    )
    def test_variants_collapse_to_one_key(self, header):
        assert normalize_header(header) == "genericname"

    def test_none_is_empty(self):
        assert normalize_header(None) == ""

    def test_digits_are_kept(self):
        assert normalize_header("Col 1") == "col1"

    def test_non_ascii_letters_are_kept(self):
        assert normalize_header("Médicament Nom") == "médicamentnom"
        assert normalize_header("Préparation_Forme") == normalize_header("préparation forme")


class TestResolveHeader:
    def test_returns_original_header_spelling(self):
        row = {"Product Name": "Paracetamol", "MRP": "10"}
        assert resolve_header(row, ["name", "product name"]) == "Product Name"
        assert resolve_header(row, FIELD_ALIASES["price"]) == "MRP"

    def test_not_found(self):
        assert resolve_header({"Colour": "red"}, ["price", "cost"]) is None

    def test_empty_row(self):
        assert resolve_header({}, ["name"]) is None

    def test_first_matching_header_in_row_order_wins(self):
        row = {"cost": "5", "price": "9"}
        assert resolve_header(row, ["price", "cost"]) == "cost"

    @pytest.mark.parametrize("header", ["side effects", "Side_Effects", "SIDE-EFFECTS", "sideEffects"])
    def test_field_lookup_insensitive_to_separators(self, header):
        assert resolve_field({header: "x"}, "side_effects") == header

    def test_every_field_resolves_its_own_aliases(self):
        for field_name, aliases in FIELD_ALIASES.items():
            for alias in aliases:
                spelled = alias.upper().replace(" ", "_")
                assert resolve_field({spelled: "v"}, field_name) == spelled
