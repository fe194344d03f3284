"""Decode uploaded CSV/XLSX files into SheetData and encode catalogs as XLSX."""

import csv
import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from ..exceptions import EmptySheetError, UnsupportedSheetFormatError
from .models import Row, SheetData

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xlsm")
OUTPUT_SHEET_TITLE = "Catalog"


def _cell_text(value: Any) -> str:
    """Render a cell value the way it reads in a spreadsheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _dedupe_headers(raw_headers: list[str]) -> list[str]:
    """Make headers unique by suffixing repeats with _1, _2, ..."""
    headers: list[str] = []
    counts: dict[str, int] = {}
    for header in raw_headers:
        if not header:
            headers.append(header)
        elif header in counts:
            counts[header] += 1
            candidate = f"{header}_{counts[header]}"
            while candidate in counts:
                counts[header] += 1
                candidate = f"{header}_{counts[header]}"
            counts[candidate] = 0
            headers.append(candidate)
        else:
            counts[header] = 0
            headers.append(header)
    return headers


def _build_sheet(table: Iterable[list[str]]) -> SheetData:
    """Build SheetData from a grid whose first non-blank row is the header."""
    header_row: Optional[list[str]] = None
    rows: list[Row] = []

    for values in table:
        if not any(value.strip() for value in values):
            continue
        if header_row is None:
            header_row = [value.strip() for value in values]
            # Trailing unnamed columns are layout noise, not data
            while header_row and not header_row[-1]:
                header_row.pop()
            header_row = _dedupe_headers(header_row)
            continue
        row: Row = {}
        for index, header in enumerate(header_row):
            if not header:
                continue
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)

    headers = [header for header in (header_row or []) if header]
    if not headers:
        raise EmptySheetError()
    return SheetData(headers=headers, rows=rows)


def _decode_csv(data: bytes) -> SheetData:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.info("CSV is not valid UTF-8, falling back to latin-1")
        text = data.decode("latin-1")
    reader = csv.reader(io.StringIO(text))
    return _build_sheet(reader)


def _decode_xlsx(data: bytes) -> SheetData:
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        raise UnsupportedSheetFormatError(f"Could not open workbook: {e}") from e

    try:
        worksheet = workbook.active
        grid = (
            [_cell_text(value) for value in values]
            for values in worksheet.iter_rows(values_only=True)
        )
        return _build_sheet(grid)
    finally:
        workbook.close()


def decode(filename: str, data: bytes) -> SheetData:
    """
    Decode an uploaded sheet into SheetData.

    Args:
        filename: Original file name; its suffix selects the parser
        data: Raw file contents

    Returns:
        SheetData with the first non-blank row as headers

    Raises:
        EmptySheetError: If no header cells are detected
        UnsupportedSheetFormatError: If the file type is not supported
    """
    suffix = Path(filename).suffix.lower()
    if suffix == ".csv":
        sheet = _decode_csv(data)
    elif suffix in (".xlsx", ".xlsm"):
        sheet = _decode_xlsx(data)
    else:
        raise UnsupportedSheetFormatError(
            f"Unsupported file type '{suffix or filename}'. Expected one of: "
            + ", ".join(SUPPORTED_SUFFIXES)
        )

    stats = sheet.get_statistics()
    logger.info(
        f"Decoded {filename}: {stats['column_count']} columns, {stats['row_count']} rows"
    )
    return sheet


def decode_path(path: Path) -> SheetData:
    """Decode a sheet from the local filesystem."""
    return decode(path.name, path.read_bytes())


def _worksheet_text(value: str) -> str:
    """Drop control characters that XLSX cannot store."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _write_text_row(worksheet, row_index: int, values: list[str]):
    """Write one row whose cells are always stored as text, never formulas."""
    for column, value in enumerate(values, start=1):
        cell = worksheet.cell(row=row_index, column=column, value=_worksheet_text(value))
        if cell.data_type == "f":
            cell.data_type = "s"


def encode(headers: list[str], rows: list[Row]) -> bytes:
    """Write headers and rows to an in-memory XLSX workbook."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = OUTPUT_SHEET_TITLE
    _write_text_row(worksheet, 1, list(headers))
    for row_index, row in enumerate(rows, start=2):
        _write_text_row(worksheet, row_index, [row.get(header, "") for header in headers])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
