"""Tabular sheet models and the CSV/XLSX codec."""

from .models import Row, SheetData
from .codec import decode, decode_path, encode

__all__ = [
    "Row",
    "SheetData",
    "decode",
    "decode_path",
    "encode",
]
