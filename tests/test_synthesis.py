"""Tests for smart fill synthesis and row materialization."""

import pytest

from catalogsmith.sheets import SheetData
from catalogsmith.synthesis import (
    FieldSynthesizer,
    RowMaterializer,
    SmartFillRule,
    find_raw_header,
)


@pytest.fixture
def synthesizer():
    return FieldSynthesizer()


class TestMappedValues:
    """Mapped headers copy their source column."""

    def test_mapped_header_copies_value(self, synthesizer):
        row = {"Item Name": "Runner Shoe", "Brand Name": "Acme"}
        value = synthesizer.synthesize("Title", row, {"Title": "Item Name"}, ["Brand Name", "Item Name"])
        assert value == "Runner Shoe"

    def test_mapped_header_missing_cell_is_empty(self, synthesizer):
        value = synthesizer.synthesize("Title", {}, {"Title": "Item Name"}, ["Brand Name", "Item Name"])
        assert value == ""

    def test_mapping_beats_smart_fill(self, synthesizer):
        row = {"Brand Name": "Acme", "Item Name": "Runner Shoe", "Notes": "hand made"}
        value = synthesizer.synthesize("Title", row, {"Title": "Notes"}, list(row))
        assert value == "hand made"

    def test_empty_mapping_entry_falls_back_to_smart_fill(self, synthesizer):
        row = {"Brand Name": "Acme", "Item Name": "Runner Shoe"}
        value = synthesizer.synthesize("Title", row, {"Title": ""}, list(row))
        assert value == "Acme Runner Shoe"


class TestTitleFill:
    """Title = brand + name."""

    def test_brand_and_name(self, synthesizer):
        row = {"Brand Name": "Acme", "Item Name": "Runner Shoe"}
        value = synthesizer.synthesize("Title", row, {}, ["Brand Name", "Item Name"])
        assert value == "Acme Runner Shoe"

    def test_header_order_does_not_change_title(self, synthesizer):
        row = {"Brand Name": "Acme", "Item Name": "Runner Shoe"}
        value = synthesizer.synthesize("Title", row, {}, ["Item Name", "Brand Name"])
        assert value == "Acme Runner Shoe"

    def test_missing_brand_column(self, synthesizer):
        row = {"Product Name": "Runner Shoe"}
        assert synthesizer.synthesize("Item Title", row, {}, ["Product Name"]) == "Runner Shoe"

    def test_empty_brand_value_has_no_leading_space(self, synthesizer):
        row = {"Brand": "", "Name": "Runner Shoe"}
        assert synthesizer.synthesize("Title", row, {}, ["Brand", "Name"]) == "Runner Shoe"

    def test_no_sources_is_empty(self, synthesizer):
        assert synthesizer.synthesize("Title", {"SKU": "1"}, {}, ["SKU"]) == ""


class TestBulletFill:
    """Bullet = first substantial description segment."""

    def test_first_segment_over_twenty_chars(self, synthesizer):
        row = {"Description": "Lightweight mesh upper. Great for daily runs and casual wear."}
        value = synthesizer.synthesize("Bullet Point 1", row, {}, ["Description"])

        assert value == "Lightweight mesh upper"
        assert len(value) <= 180

    def test_skips_short_segments(self, synthesizer):
        row = {"Long Description": "Soft. Comfy | Breathable knit for everyday wear\nMachine wash"}
        value = synthesizer.synthesize("bullet_point_2", row, {}, ["Long Description"])
        assert value == "Breathable knit for everyday wear"

    def test_splits_on_bullet_glyph(self, synthesizer):
        row = {"Description": "Tiny•Reinforced toe cap for durability"}
        value = synthesizer.synthesize("Bullet 1", row, {}, ["Description"])
        assert value == "Reinforced toe cap for durability"

    def test_truncates_to_180_chars(self, synthesizer):
        row = {"Description": "x" * 300}
        value = synthesizer.synthesize("Bullet 1", row, {}, ["Description"])
        assert value == "x" * 180

    def test_no_qualifying_segment_is_empty(self, synthesizer):
        row = {"Description": "Short. Tiny. Small."}
        assert synthesizer.synthesize("Bullet 1", row, {}, ["Description"]) == ""

    def test_no_description_column_is_empty(self, synthesizer):
        row = {"Details": "A long enough sentence to qualify as a bullet"}
        assert synthesizer.synthesize("Bullet 1", row, {}, ["Details"]) == ""


class TestKeywordFill:
    """Keywords = lowercased material, color, size, category."""

    def test_collects_present_values_in_order(self, synthesizer):
        row = {"Color": "Red", "Material": "Cotton"}
        value = synthesizer.synthesize("Search Keywords", row, {}, ["Color", "Material", "Brand"])
        assert value == "cotton, red"

    def test_all_four_sources(self, synthesizer):
        row = {
            "Category": "Footwear",
            "Size": "UK 9",
            "Base Color": "Navy",
            "Upper Material": "Suede",
        }
        value = synthesizer.synthesize("Generic Keywords", row, {}, list(row))
        assert value == "suede, navy, uk 9, footwear"

    def test_no_sources_is_empty(self, synthesizer):
        assert synthesizer.synthesize("Search Keywords", {"SKU": "1"}, {}, ["SKU"]) == ""


class TestRulePriority:
    """Rule order and defaults."""

    def test_title_rule_precedes_bullet(self, synthesizer):
        row = {"Brand": "Acme", "Name": "Shoe", "Description": "A long enough description sentence"}
        value = synthesizer.synthesize("Bullet Title", row, {}, list(row))
        assert value == "Acme Shoe"

    def test_unrecognized_header_is_empty(self, synthesizer):
        row = {"Brand": "Acme", "Name": "Shoe"}
        assert synthesizer.synthesize("Warranty", row, {}, list(row)) == ""

    def test_custom_rules(self):
        synthesizer = FieldSynthesizer(
            rules=[SmartFillRule("warranty", lambda row, headers: "1 year")]
        )
        assert synthesizer.synthesize("Warranty Period", {}, {}, []) == "1 year"
        assert synthesizer.synthesize("Title", {"Name": "Shoe"}, {}, ["Name"]) == ""

    def test_find_raw_header_uses_declaration_order(self):
        headers = ["Pack Size", "Size Chart", "Size"]
        assert find_raw_header(headers, "size") == "Pack Size"
        assert find_raw_header(headers, "size", exclude="Pack Size") == "Size Chart"
        assert find_raw_header(headers, "weight") is None


class TestRowMaterializer:
    """Tests for RowMaterializer."""

    def test_one_row_per_raw_row_with_template_keys(self, template_sheet, raw_sheet):
        rows = RowMaterializer().materialize(template_sheet, raw_sheet, {})

        assert len(rows) == len(raw_sheet.rows)
        for row in rows:
            assert list(row) == template_sheet.headers

    def test_mixes_mapping_and_smart_fill(self, template_sheet, raw_sheet):
        mapping = {"SKU": "Item ID", "Selling Price": "Offer Price"}

        rows = RowMaterializer().materialize(template_sheet, raw_sheet, mapping)

        assert rows[0] == {
            "SKU": "A-100",
            "Title": "Acme Runner Shoe",
            "Brand": "",
            "Selling Price": "1999",
            "Bullet Point 1": "Lightweight mesh upper",
            "Search Keywords": "mesh",
        }
        assert rows[1]["Title"] == "Trail Boot"
        assert rows[1]["Bullet Point 1"] == "Waterproof leather build for mountain trails"

    def test_empty_raw_sheet_yields_no_rows(self, template_sheet):
        raw = SheetData(headers=["SKU"], rows=[])
        assert RowMaterializer().materialize(template_sheet, raw, {}) == []

    def test_preview_truncates_to_25_rows(self):
        template = SheetData(headers=["SKU"])
        raw = SheetData(headers=["sku"], rows=[{"sku": str(i)} for i in range(30)])

        preview = RowMaterializer().preview(template, raw, {"SKU": "sku"})

        assert len(preview) == 25
        assert preview[-1] == {"SKU": "24"}

    def test_export_keeps_every_row(self):
        template = SheetData(headers=["SKU"])
        raw = SheetData(headers=["sku"], rows=[{"sku": str(i)} for i in range(30)])

        rows = RowMaterializer().export(template, raw, {"SKU": "sku"})

        assert len(rows) == 30

    def test_is_deterministic(self, template_sheet, raw_sheet):
        materializer = RowMaterializer()
        first = materializer.materialize(template_sheet, raw_sheet, {"SKU": "Item ID"})
        second = materializer.materialize(template_sheet, raw_sheet, {"SKU": "Item ID"})
        assert first == second
