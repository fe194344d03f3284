"""Column reconciliation between a marketplace template and a raw sheet."""

from .models import Mapping, MatchTier, ColumnMatch
from .normalizer import normalize_header
from .synonyms import SYNONYM_CATALOG, CANONICAL_FIELDS, aliases_of, canonical_field_for
from .mapper import ColumnMapper, apply_override, auto_detect

__all__ = [
    "Mapping",
    "MatchTier",
    "ColumnMatch",
    "normalize_header",
    "SYNONYM_CATALOG",
    "CANONICAL_FIELDS",
    "aliases_of",
    "canonical_field_for",
    "ColumnMapper",
    "apply_override",
    "auto_detect",
]
