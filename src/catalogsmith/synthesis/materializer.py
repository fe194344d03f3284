"""Build template-shaped rows from a raw sheet."""

import logging
from typing import Optional

from ..config import settings
from ..mapping.models import Mapping
from ..sheets import Row, SheetData
from .synthesizer import FieldSynthesizer

logger = logging.getLogger(__name__)


class RowMaterializer:
    """Applies a mapping plus smart fill to every raw row."""

    def __init__(self, synthesizer: Optional[FieldSynthesizer] = None):
        self.synthesizer = synthesizer or FieldSynthesizer()

    def materialize(self, template: SheetData, raw: SheetData, mapping: Mapping) -> list[Row]:
        """
        Produce one output row per raw row.

        Every output row has exactly the template headers as keys, in
        template order. Nothing is cached; call again whenever any input
        changes.
        """
        return [self._build_row(template, raw, mapping, row) for row in raw.rows]

    def preview(
        self,
        template: SheetData,
        raw: SheetData,
        mapping: Mapping,
        limit: Optional[int] = None,
    ) -> list[Row]:
        """Materialize only the leading rows shown in a preview."""
        limit = settings.preview_row_limit if limit is None else limit
        head = SheetData(headers=raw.headers, rows=raw.rows[:limit])
        return self.materialize(template, head, mapping)

    def export(self, template: SheetData, raw: SheetData, mapping: Mapping) -> list[Row]:
        """Materialize the full catalog."""
        rows = self.materialize(template, raw, mapping)
        logger.info(f"Materialized {len(rows)} rows across {len(template.headers)} columns")
        return rows

    def _build_row(self, template: SheetData, raw: SheetData, mapping: Mapping, row: Row) -> Row:
        return {
            header: self.synthesizer.synthesize(header, row, mapping, raw.headers)
            for header in template.headers
        }
