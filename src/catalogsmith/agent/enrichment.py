"""Catalog enrichment insights from the model, with a static playbook fallback."""

import logging
import re
from typing import Optional

from ..config import settings
from ..exceptions import GatewayError
from ..llm import ENRICHMENT_SYSTEM_PROMPT, ModelGateway, build_enrichment_prompt
from ..sheets import Row

logger = logging.getLogger(__name__)

FALLBACK_INSIGHTS: tuple[str, ...] = (
    "Tighten your keyword density (brand + usage + material) to lift visibility.",
    "Standardize bullet points with 180 character concision and feature-first copy.",
    "Cross-check taxonomy for every channel: Amazon browse node vs. Myntra gender category vs. Flipkart vertical.",
    "Attach compliance docs (GST, product certifications) for restricted categories before upload.",
)

_LINE_BREAKS = re.compile(r"\n+")
_LEADING_MARKERS = re.compile(r"^[-*•\d.)\s]+")


def parse_insights(text: str) -> list[str]:
    """
    Split model prose into insight lines.

    Leading bullet glyphs, list numbers and punctuation are stripped and
    blank lines dropped. This is best-effort shaping, not a grammar.
    """
    insights = []
    for line in _LINE_BREAKS.split(text):
        cleaned = _LEADING_MARKERS.sub("", line).strip()
        if cleaned:
            insights.append(cleaned)
    return insights


class EnrichmentOrchestrator:
    """Requests SEO, compliance and copy insights for a catalog sample."""

    def __init__(self, gateway: ModelGateway, sample_limit: Optional[int] = None):
        self.gateway = gateway
        self.sample_limit = settings.enrichment_sample_limit if sample_limit is None else sample_limit

    async def enrich(self, marketplace: str, sample_rows: list[Row]) -> list[str]:
        """
        Return insight strings for the marketplace.

        Only the first few sample rows are sent. Any gateway outcome other
        than usable text yields FALLBACK_INSIGHTS; this method never raises.
        """
        prompt = build_enrichment_prompt(marketplace, list(sample_rows[: self.sample_limit]))

        try:
            text = await self.gateway.summarize(
                ENRICHMENT_SYSTEM_PROMPT,
                prompt,
                max_tokens=settings.enrichment_max_tokens,
            )
        except GatewayError as e:
            logger.warning(f"Enrichment degraded to playbook: {e}")
            return list(FALLBACK_INSIGHTS)
        except Exception:
            logger.exception("Unexpected enrichment failure, using playbook")
            return list(FALLBACK_INSIGHTS)

        if text is None:
            logger.debug("Model unavailable, returning enrichment playbook")
            return list(FALLBACK_INSIGHTS)

        insights = parse_insights(text)
        if not insights:
            logger.warning("Model returned no usable insights, using playbook")
            return list(FALLBACK_INSIGHTS)

        logger.info(f"Generated {len(insights)} enrichment insights for {marketplace}")
        return insights
