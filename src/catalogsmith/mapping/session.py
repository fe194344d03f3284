"""In-memory state of one catalog build: sheets, mapping and marketplace."""

import logging
import time
from typing import Optional

from ..config import settings
from ..exceptions import SheetsNotLoadedError, UnknownHeaderError, UnknownMarketplaceError
from ..sheets import Row, SheetData, encode
from ..synthesis import RowMaterializer
from .mapper import ColumnMapper, apply_override
from .models import ColumnMatch, Mapping, MatchTier
from .normalizer import normalize_header

logger = logging.getLogger(__name__)

MARKETPLACES = ("Amazon", "Flipkart", "Meesho", "Myntra")


def detect_marketplace_tags(raw: SheetData) -> list[str]:
    """Return the marketplaces named in any raw header, in MARKETPLACES order."""
    normalized = [normalize_header(header) for header in raw.headers]
    return [
        marketplace
        for marketplace in MARKETPLACES
        if any(marketplace.lower() in header for header in normalized)
    ]


def validate_marketplace(marketplace: str) -> str:
    """Return the canonical spelling of a supported marketplace."""
    for candidate in MARKETPLACES:
        if candidate.lower() == marketplace.strip().lower():
            return candidate
    raise UnknownMarketplaceError(
        f"Unknown marketplace '{marketplace}'. Expected one of: {', '.join(MARKETPLACES)}"
    )


class CatalogSession:
    """
    Holds a template and raw sheet and keeps their mapping current.

    Loading either sheet recomputes the whole mapping, discarding manual
    overrides. Overrides otherwise stick until that next recompute.
    """

    def __init__(
        self,
        mapper: Optional[ColumnMapper] = None,
        materializer: Optional[RowMaterializer] = None,
        marketplace: Optional[str] = None,
    ):
        self.mapper = mapper or ColumnMapper()
        self.materializer = materializer or RowMaterializer()
        self.marketplace = validate_marketplace(marketplace or settings.default_marketplace)
        self.template: Optional[SheetData] = None
        self.raw: Optional[SheetData] = None
        self.mapping: Mapping = {}
        self._overrides: dict[str, Optional[str]] = {}

    @property
    def is_ready(self) -> bool:
        return self.template is not None and self.raw is not None

    def load_template(self, template: SheetData):
        """Replace the template and recompute the mapping."""
        self.template = template
        self._recompute()

    def load_raw(self, raw: SheetData):
        """Replace the raw sheet and recompute the mapping."""
        self.raw = raw
        self._recompute()

    def set_marketplace(self, marketplace: str):
        self.marketplace = validate_marketplace(marketplace)

    def override(self, template_header: str, raw_header: Optional[str]) -> Mapping:
        """
        Point one template header at a raw header, or clear it.

        Raises:
            SheetsNotLoadedError: If either sheet is missing
            UnknownHeaderError: If either header is not in its sheet
        """
        template, raw = self._require_sheets()
        if template_header not in template.headers:
            raise UnknownHeaderError(f"Template has no header '{template_header}'")
        if raw_header and raw_header not in raw.headers:
            raise UnknownHeaderError(f"Raw sheet has no header '{raw_header}'")

        self.mapping = apply_override(self.mapping, template_header, raw_header)
        self._overrides[template_header] = raw_header or None
        logger.info(f"Manual mapping: {template_header} -> {raw_header or '(smart fill)'}")
        return self.mapping

    def matches(self) -> list[ColumnMatch]:
        """Explain the current mapping, reporting overrides as manual."""
        template, raw = self._require_sheets()
        explained = []
        for match in self.mapper.explain(template, raw):
            if match.template_header in self._overrides:
                match = ColumnMatch(
                    template_header=match.template_header,
                    raw_header=self._overrides[match.template_header],
                    tier=MatchTier.MANUAL,
                    canonical_field=match.canonical_field,
                )
            explained.append(match)
        return explained

    def marketplace_tags(self) -> list[str]:
        if self.raw is None:
            return []
        return detect_marketplace_tags(self.raw)

    def preview(self) -> list[Row]:
        template, raw = self._require_sheets()
        return self.materializer.preview(template, raw, self.mapping)

    def export_rows(self) -> list[Row]:
        template, raw = self._require_sheets()
        return self.materializer.export(template, raw, self.mapping)

    def export_workbook(self) -> bytes:
        """Materialize every row and encode it as an XLSX workbook."""
        template, _ = self._require_sheets()
        return encode(template.headers, self.export_rows())

    def export_filename(self) -> str:
        return f"catalog-{self.marketplace.lower()}-{int(time.time() * 1000)}.xlsx"

    def enrichment_sample(self) -> list[Row]:
        """Leading preview rows sent along with an enrichment request."""
        return self.preview()[: settings.enrichment_sample_limit]

    def _recompute(self):
        self._overrides = {}
        if not self.is_ready:
            self.mapping = {}
            return
        self.mapping = self.mapper.auto_detect(self.template, self.raw)

    def _require_sheets(self) -> tuple[SheetData, SheetData]:
        if self.template is None or self.raw is None:
            raise SheetsNotLoadedError(
                "Upload both the marketplace template and the raw catalog first"
            )
        return self.template, self.raw
