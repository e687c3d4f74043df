"""Unit normalization and option merging."""

import pytest

from html2docx.docx_ir.base import PORTRAIT_HEIGHT, PORTRAIT_WIDTH
from html2docx.docx_ir.options import (
    DEFAULT_DOCUMENT_OPTIONS,
    LANDSCAPE_MARGINS,
    PORTRAIT_MARGINS,
    UnitKind,
    fixup_font_size,
    merge_options,
    normalize_document_options,
    normalize_units,
    parse_length,
    resolve_document_options,
    to_twip,
)


class TestParseLength:
    @pytest.mark.parametrize(
        "value, kind",
        [
            ("10px", UnitKind.PIXEL),
            ("2cm", UnitKind.CENTIMETER),
            ("1in", UnitKind.INCH),
            ("12pt", UnitKind.POINT),
            ("12PT", UnitKind.POINT),
            (1440, UnitKind.NATIVE),
            ("1440", UnitKind.NATIVE),
            ("auto", UnitKind.PASSTHROUGH),
            ("10px solid", UnitKind.PASSTHROUGH),
        ],
    )
    def test_classification(self, value, kind):
        assert parse_length(value).kind == kind

    @pytest.mark.parametrize("value", [None, "", 0, "0", False])
    def test_falsy_values_are_empty(self, value):
        assert parse_length(value).kind == UnitKind.EMPTY


class TestTwipConversion:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10px", 150),
            ("96px", 1440),
            ("1in", 1440),
            ("1cm", 560),
            ("2cm", 1140),
            ("1pt", 20),
            (720, 720),
        ],
    )
    def test_to_twip(self, value, expected):
        assert to_twip(parse_length(value)) == expected

    def test_unrecognized_value_passes_through(self):
        assert to_twip(parse_length("auto")) == "auto"


class TestFontSize:
    def test_points(self):
        assert fixup_font_size("12pt") == 24

    def test_pixels(self):
        assert fixup_font_size("16px") == 24

    def test_native(self):
        assert fixup_font_size(22) == 22

    @pytest.mark.parametrize("value", [None, "", "0", 0])
    def test_empty_is_none(self, value):
        assert fixup_font_size(value) is None


class TestNormalizeUnits:
    def test_missing_fields_use_defaults(self):
        result = normalize_units({"top": "1in"}, PORTRAIT_MARGINS)
        assert result["top"] == 1440
        assert result["right"] == PORTRAIT_MARGINS["right"]
        assert result["gutter"] == PORTRAIT_MARGINS["gutter"]

    def test_falsy_field_uses_default(self):
        result = normalize_units({"left": "0", "right": None}, PORTRAIT_MARGINS)
        assert result["left"] == PORTRAIT_MARGINS["left"]
        assert result["right"] == PORTRAIT_MARGINS["right"]

    def test_each_field_converted_independently(self):
        result = normalize_units({"width": "10px", "height": "1in"}, {"width": 1, "height": 2})
        assert result == {"width": 150, "height": 1440}

    def test_non_mapping_returns_none(self):
        assert normalize_units("1in", PORTRAIT_MARGINS) is None

    def test_input_not_mutated(self):
        margins = {"top": "1in"}
        normalize_document_options({"margins": margins})
        assert margins == {"top": "1in"}


class TestMergeOptions:
    def test_idempotent(self):
        options = {"a": 1, "b": {"c": 2}}
        assert merge_options(options, options) == options

    def test_disjoint_union(self):
        assert merge_options({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_patch_wins(self):
        assert merge_options({"a": 1}, {"a": 2}) == {"a": 2}

    def test_shallow(self):
        merged = merge_options({"margins": {"top": 1, "left": 2}}, {"margins": {"top": 3}})
        assert merged["margins"] == {"top": 3}


class TestResolveDocumentOptions:
    def test_defaults(self):
        options = resolve_document_options()
        assert options["page_size"] == {"width": PORTRAIT_WIDTH, "height": PORTRAIT_HEIGHT}
        assert options["margins"] == PORTRAIT_MARGINS
        assert options["font"] == DEFAULT_DOCUMENT_OPTIONS["font"]

    def test_landscape_swaps_page_size(self):
        options = resolve_document_options({"orientation": "landscape"})
        assert options["page_size"] == {"width": PORTRAIT_HEIGHT, "height": PORTRAIT_WIDTH}
        assert options["margins"] == LANDSCAPE_MARGINS

    def test_font_size_normalized(self):
        options = resolve_document_options({"font_size": "12pt"})
        assert options["font_size"] == 24

    def test_invalid_margins_keep_defaults(self):
        options = resolve_document_options({"margins": "wide"})
        assert options["margins"] == PORTRAIT_MARGINS

    def test_defaults_not_shared(self):
        first = resolve_document_options()
        first["margins"]["top"] = 1
        assert resolve_document_options()["margins"]["top"] == PORTRAIT_MARGINS["top"]
