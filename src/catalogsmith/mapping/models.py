"""Data models for template-to-raw column mapping."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

# Template header -> raw header. A missing key or "" means unmapped.
Mapping = dict[str, str]


class MatchTier(str, Enum):
    """How a template header was paired with a raw header."""

    EXACT = "exact"  # Normalized headers are identical
    SYNONYM = "synonym"  # Raw header contains an alias of the same canonical field
    FUZZY = "fuzzy"  # Raw header contains the template header's first word
    MANUAL = "manual"  # Set by the user
    UNMAPPED = "unmapped"  # Left to smart fill


class ColumnMatch(BaseModel):
    """Explains the mapping decision for one template header."""

    template_header: str
    raw_header: Optional[str] = None
    tier: MatchTier = MatchTier.UNMAPPED
    canonical_field: Optional[str] = None

    @property
    def is_mapped(self) -> bool:
        return bool(self.raw_header)
