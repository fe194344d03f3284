"""Model-backed assistant features with offline fallbacks."""

from .enrichment import EnrichmentOrchestrator, FALLBACK_INSIGHTS, parse_insights
from .dialogue import AssistantDialogueRouter, FallbackRule, FALLBACK_RULES, fallback_reply

__all__ = [
    "EnrichmentOrchestrator",
    "FALLBACK_INSIGHTS",
    "parse_insights",
    "AssistantDialogueRouter",
    "FallbackRule",
    "FALLBACK_RULES",
    "fallback_reply",
]
