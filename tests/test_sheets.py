"""Tests for sheet models and the CSV/XLSX codec."""

import io

import pytest
from openpyxl import Workbook, load_workbook
from pydantic import ValidationError

from catalogsmith.exceptions import EmptySheetError, UnsupportedSheetFormatError
from catalogsmith.sheets import SheetData, decode, decode_path, encode


class TestSheetData:
    """Tests for the SheetData model."""

    def test_duplicate_headers_rejected(self):
        with pytest.raises(ValidationError):
            SheetData(headers=["SKU", "SKU"])

    def test_case_variants_are_distinct(self):
        sheet = SheetData(headers=["Color", "color"])
        assert sheet.headers == ["Color", "color"]

    def test_statistics(self):
        sheet = SheetData(headers=["SKU"], rows=[{"SKU": "1"}, {"SKU": "2"}])
        assert sheet.get_statistics() == {"column_count": 1, "row_count": 2}


class TestDecodeCsv:
    """CSV decoding."""

    def test_first_row_is_header(self):
        data = b"SKU,Brand Name,Price\nA-1,Acme,100\nA-2,Zen,200\n"

        sheet = decode("raw.csv", data)

        assert sheet.headers == ["SKU", "Brand Name", "Price"]
        assert sheet.rows == [
            {"SKU": "A-1", "Brand Name": "Acme", "Price": "100"},
            {"SKU": "A-2", "Brand Name": "Zen", "Price": "200"},
        ]

    def test_short_rows_are_padded(self):
        sheet = decode("raw.csv", b"SKU,Brand\nA-1\n")
        assert sheet.rows == [{"SKU": "A-1", "Brand": ""}]

    def test_blank_lines_and_bom_are_ignored(self):
        sheet = decode("raw.CSV", "\ufeff\nSKU,Brand\n,\nA-1,Acme\n".encode("utf-8"))
        assert sheet.headers == ["SKU", "Brand"]
        assert sheet.rows == [{"SKU": "A-1", "Brand": "Acme"}]

    def test_duplicate_headers_get_suffixes(self):
        sheet = decode("raw.csv", b"Name,Name,Name\na,b,c\n")
        assert sheet.headers == ["Name", "Name_1", "Name_2"]
        assert sheet.rows[0]["Name_2"] == "c"

    def test_trailing_unnamed_columns_dropped(self):
        sheet = decode("raw.csv", b"SKU,Brand,,\nA-1,Acme,,\n")
        assert sheet.headers == ["SKU", "Brand"]

    def test_latin1_fallback(self):
        sheet = decode("raw.csv", "Marque,Couleur\nCafé,Crème\n".encode("latin-1"))
        assert sheet.rows[0]["Marque"] == "Café"

    @pytest.mark.parametrize("data", [b"", b"\n\n", b" , \n"])
    def test_no_headers_is_empty_sheet(self, data):
        with pytest.raises(EmptySheetError, match="No columns detected in sheet."):
            decode("raw.csv", data)


class TestXlsx:
    """XLSX decoding and encoding."""

    def _workbook_bytes(self, rows):
        workbook = Workbook()
        worksheet = workbook.active
        for row in rows:
            worksheet.append(row)
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    def test_decode_renders_numbers_as_text(self):
        data = self._workbook_bytes([["SKU", "Price", "Stock"], ["A-1", 199.0, 12]])

        sheet = decode("raw.xlsx", data)

        assert sheet.headers == ["SKU", "Price", "Stock"]
        assert sheet.rows == [{"SKU": "A-1", "Price": "199", "Stock": "12"}]

    def test_decode_empty_workbook(self):
        with pytest.raises(EmptySheetError):
            decode("raw.xlsx", self._workbook_bytes([]))

    def test_decode_corrupt_workbook(self):
        with pytest.raises(UnsupportedSheetFormatError):
            decode("raw.xlsx", b"not a workbook")

    def test_encode_writes_headers_then_rows(self):
        data = encode(["SKU", "Title"], [{"SKU": "A-1", "Title": "Acme Shoe"}, {"SKU": "A-2"}])

        worksheet = load_workbook(io.BytesIO(data)).active
        values = [list(row) for row in worksheet.iter_rows(values_only=True)]

        assert worksheet.title == "Catalog"
        assert values[0] == ["SKU", "Title"]
        assert values[1] == ["A-1", "Acme Shoe"]
        assert values[2][0] == "A-2"

    def test_encode_strips_control_characters(self):
        data = encode(["SKU", "Title"], [{"SKU": "A-1\x01", "Title": "Soft\x0bcotton tee"}])

        sheet = decode("catalog.xlsx", data)

        assert sheet.rows == [{"SKU": "A-1", "Title": "Softcotton tee"}]

    def test_encode_keeps_equals_prefixed_text_as_text(self):
        data = encode(["SKU", "Title"], [{"SKU": "A-1", "Title": "=2+3 pack"}])

        worksheet = load_workbook(io.BytesIO(data)).active
        sheet = decode("catalog.xlsx", data)

        assert worksheet["B2"].data_type == "s"
        assert sheet.rows == [{"SKU": "A-1", "Title": "=2+3 pack"}]

    def test_decode_path(self, tmp_path):
        path = tmp_path / "template.csv"
        path.write_text("SKU,Title\n", encoding="utf-8")

        sheet = decode_path(path)

        assert sheet.headers == ["SKU", "Title"]
        assert sheet.rows == []


def test_unsupported_suffix():
    with pytest.raises(UnsupportedSheetFormatError):
        decode("notes.txt", b"SKU\n1\n")
