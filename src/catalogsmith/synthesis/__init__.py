"""Derived-field synthesis and row materialization."""

from .synthesizer import (
    FieldSynthesizer,
    SmartFillRule,
    SMART_FILL_RULES,
    find_raw_header,
    fill_title,
    fill_bullet,
    fill_keywords,
)
from .materializer import RowMaterializer

__all__ = [
    "FieldSynthesizer",
    "SmartFillRule",
    "SMART_FILL_RULES",
    "find_raw_header",
    "fill_title",
    "fill_bullet",
    "fill_keywords",
    "RowMaterializer",
]
