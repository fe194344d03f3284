"""Router for directing assistant requests to dialogue or enrichment."""

import logging
from typing import Any

from . import AssistantMode, AssistantRequest, AssistantResponse
from ..agent import AssistantDialogueRouter, EnrichmentOrchestrator
from ..config import settings
from ..llm import LLMMessage

logger = logging.getLogger(__name__)


def coerce_history(entries: list[Any]) -> list[LLMMessage]:
    """Keep only {role: user|assistant, content: str} entries."""
    history = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        role = entry.get("role")
        content = entry.get("content")
        if role in ("user", "assistant") and isinstance(content, str):
            history.append(LLMMessage(role=role, content=content))
    return history


def stringify_row(row: dict[str, Any]) -> dict[str, str]:
    return {str(key): "" if value is None else str(value) for key, value in row.items()}


class ModeRouter:
    """Routes assistant requests by mode."""

    def __init__(
        self,
        dialogue: AssistantDialogueRouter,
        enrichment: EnrichmentOrchestrator,
    ):
        """
        Initialize the mode router.

        Args:
            dialogue: Handles voice and text messages
            enrichment: Handles catalog enrichment requests
        """
        self.dialogue = dialogue
        self.enrichment = enrichment
        logger.info("ModeRouter initialized")

    async def route(self, request: AssistantRequest) -> AssistantResponse:
        """
        Route a request to the handler for its mode.

        Args:
            request: Assistant request with mode and payload

        Returns:
            AssistantResponse with either reply or enrichment set
        """
        logger.info(f"Routing assistant request in {request.mode.value} mode")

        if request.mode == AssistantMode.CATALOG_ENRICHMENT:
            return await self._handle_enrichment(request)
        return await self._handle_dialogue(request)

    async def _handle_dialogue(self, request: AssistantRequest) -> AssistantResponse:
        history = coerce_history(request.history)
        reply = await self.dialogue.reply(request.message, history)
        return AssistantResponse(reply=reply)

    async def _handle_enrichment(self, request: AssistantRequest) -> AssistantResponse:
        marketplace = request.marketplace or settings.default_marketplace
        sample = [stringify_row(row) for row in request.sample]
        insights = await self.enrichment.enrich(marketplace, sample)
        return AssistantResponse(enrichment=insights)


__all__ = ["ModeRouter", "coerce_history"]
