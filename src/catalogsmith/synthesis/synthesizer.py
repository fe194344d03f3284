"""Cell values for template headers, mapped or smart-filled."""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..mapping.models import Mapping
from ..mapping.normalizer import normalize_header
from ..sheets import Row

BULLET_MIN_SEGMENT_CHARS = 20
BULLET_MAX_CHARS = 180
KEYWORD_SOURCE_KEYS = ("material", "color", "size", "category")

_BULLET_SPLIT = re.compile(r"[.|•\n]")


def find_raw_header(
    raw_headers: Sequence[str], key: str, exclude: Optional[str] = None
) -> Optional[str]:
    """Return the first raw header whose normalized form contains key."""
    for header in raw_headers:
        if header != exclude and key in normalize_header(header):
            return header
    return None


def _value_for(row: Row, header: Optional[str]) -> str:
    if header is None:
        return ""
    return row.get(header, "")


def fill_title(row: Row, raw_headers: Sequence[str]) -> str:
    """Brand followed by product name."""
    brand_header = find_raw_header(raw_headers, "brand")
    # "Brand Name" also contains "name"; the product name must come from another column
    name_header = find_raw_header(raw_headers, "name", exclude=brand_header)
    brand = _value_for(row, brand_header)
    name = _value_for(row, name_header)
    return f"{brand + ' ' if brand else ''}{name}".strip()


def fill_bullet(row: Row, raw_headers: Sequence[str]) -> str:
    """First substantial sentence of the description, capped at 180 chars."""
    description = _value_for(row, find_raw_header(raw_headers, "description"))
    if not description:
        return ""
    for segment in _BULLET_SPLIT.split(description):
        segment = segment.strip()
        if len(segment) > BULLET_MIN_SEGMENT_CHARS:
            return segment[:BULLET_MAX_CHARS]
    return ""


def fill_keywords(row: Row, raw_headers: Sequence[str]) -> str:
    """Lowercased material, color, size and category values."""
    keywords = []
    for key in KEYWORD_SOURCE_KEYS:
        value = _value_for(row, find_raw_header(raw_headers, key))
        if value:
            keywords.append(value.lower())
    return ", ".join(keyword for keyword in keywords if keyword)


@dataclass(frozen=True)
class SmartFillRule:
    """Fills a template header whose normalized text contains keyword."""

    keyword: str
    fill: Callable[[Row, Sequence[str]], str]


# Checked top to bottom; the first keyword found in the header wins
SMART_FILL_RULES: tuple[SmartFillRule, ...] = (
    SmartFillRule("title", fill_title),
    SmartFillRule("bullet", fill_bullet),
    SmartFillRule("keywords", fill_keywords),
)


class FieldSynthesizer:
    """Produces the value of one template cell for one raw row."""

    def __init__(self, rules: Sequence[SmartFillRule] = SMART_FILL_RULES):
        self.rules = tuple(rules)

    def synthesize(
        self,
        template_header: str,
        row: Row,
        mapping: Mapping,
        raw_headers: Sequence[str],
    ) -> str:
        """
        Compute the value for template_header.

        A mapped header copies its raw column. Otherwise the first smart fill
        rule whose keyword appears in the normalized header derives a value,
        and headers no rule recognizes stay empty.
        """
        source = mapping.get(template_header)
        if source:
            return row.get(source, "")

        rule = self.rule_for(template_header)
        if rule is None:
            return ""
        return rule.fill(row, raw_headers)

    def rule_for(self, template_header: str) -> Optional[SmartFillRule]:
        """Return the smart fill rule that would handle an unmapped header."""
        normalized = normalize_header(template_header)
        for rule in self.rules:
            if rule.keyword in normalized:
                return rule
        return None
