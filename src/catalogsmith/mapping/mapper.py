"""Automatic template-to-raw column mapping."""

import logging
from typing import Optional

from ..sheets import SheetData
from .models import ColumnMatch, Mapping, MatchTier
from .normalizer import normalize_header
from .synonyms import aliases_of, canonical_field_for

logger = logging.getLogger(__name__)


class ColumnMapper:
    """
    Pairs each template header with a raw header.

    Tiers are tried in order and the first hit wins:
    1. exact: normalized headers are equal
    2. synonym: the template header is an alias of a canonical field and the
       raw header contains one of that field's aliases
    3. fuzzy: the raw header contains the template header's first word

    Ties always go to the earliest raw header in declaration order.
    """

    def __init__(self, match_empty_token: bool = False):
        """
        Initialize the column mapper.

        Args:
            match_empty_token: When a template header normalizes to nothing,
                its fuzzy token is "" and every raw header contains it. With
                this off (the default) the fuzzy tier is skipped for such
                headers instead of grabbing the first raw column.
        """
        self.match_empty_token = match_empty_token

    def explain(self, template: SheetData, raw: SheetData) -> list[ColumnMatch]:
        """Return the match decision for every template header, in template order."""
        raw_normalized = [(header, normalize_header(header)) for header in raw.headers]
        return [self._match_header(header, raw_normalized) for header in template.headers]

    def auto_detect(self, template: SheetData, raw: SheetData) -> Mapping:
        """
        Derive a mapping from template headers to raw headers.

        Args:
            template: Target marketplace schema
            raw: Vendor inventory export

        Returns:
            Mapping containing only the template headers that found a match
        """
        matches = self.explain(template, raw)
        mapping = {match.template_header: match.raw_header for match in matches if match.is_mapped}
        logger.info(
            f"Auto-detected {len(mapping)}/{len(template.headers)} column mappings"
        )
        return mapping

    def _match_header(
        self, template_header: str, raw_normalized: list[tuple[str, str]]
    ) -> ColumnMatch:
        target = normalize_header(template_header)

        for original, normalized in raw_normalized:
            if normalized == target:
                return ColumnMatch(
                    template_header=template_header,
                    raw_header=original,
                    tier=MatchTier.EXACT,
                )

        canonical_field = canonical_field_for(target)
        if canonical_field is not None:
            aliases = aliases_of(canonical_field)
            for original, normalized in raw_normalized:
                if any(alias in normalized for alias in aliases):
                    return ColumnMatch(
                        template_header=template_header,
                        raw_header=original,
                        tier=MatchTier.SYNONYM,
                        canonical_field=canonical_field,
                    )

        token = target.split(" ")[0]
        if token or self.match_empty_token:
            for original, normalized in raw_normalized:
                if token in normalized:
                    return ColumnMatch(
                        template_header=template_header,
                        raw_header=original,
                        tier=MatchTier.FUZZY,
                        canonical_field=canonical_field,
                    )

        return ColumnMatch(
            template_header=template_header,
            tier=MatchTier.UNMAPPED,
            canonical_field=canonical_field,
        )


def apply_override(
    mapping: Mapping, template_header: str, raw_header: Optional[str]
) -> Mapping:
    """
    Return a copy of the mapping with one entry replaced.

    An empty or None raw header clears the entry so smart fill takes over.
    Every other entry is left as it was.
    """
    updated = dict(mapping)
    if raw_header:
        updated[template_header] = raw_header
    else:
        updated.pop(template_header, None)
    return updated


def auto_detect(template: SheetData, raw: SheetData) -> Mapping:
    """Derive a mapping with the default mapper."""
    return ColumnMapper().auto_detect(template, raw)
