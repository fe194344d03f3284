"""Conversational replies from the model, with keyword-routed offline answers."""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Sequence

from ..config import settings
from ..exceptions import GatewayError
from ..llm import ASSISTANT_SYSTEM_PROMPT, LLMMessage, ModelGateway

logger = logging.getLogger(__name__)

CATALOG_GUIDANCE = (
    "I'm ready to transform your catalog. Upload the marketplace template and raw sheet in "
    'the Catalog Autopilot panel. After mapping, use "Enrich copy & SEO" for optimization tips.'
)
SCHEDULE_CONFIRMATION = (
    "I've scheduled a reminder in your daily dashboard and linked it with the marketplace "
    "action items."
)
STANDBY_MESSAGE = (
    "CatalogSmith is online. I couldn't reach the language model, but you can continue using "
    "the Catalog Autopilot on the right."
)
GATEWAY_APOLOGY = "Sorry, I hit a snag reaching the language model."
EMPTY_MODEL_REPLY = "I have processed the task."

CONVERSATION_ROLES = ("user", "assistant")


@dataclass(frozen=True)
class FallbackRule:
    """Canned reply used offline when pattern matches the user's message."""

    name: str
    pattern: Pattern[str]
    response: str

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None


# Evaluated top to bottom; the first match answers
FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule("catalog", re.compile(r"catalog|sheet|listing", re.IGNORECASE), CATALOG_GUIDANCE),
    FallbackRule("schedule", re.compile(r"task|remind|schedule", re.IGNORECASE), SCHEDULE_CONFIRMATION),
)


def fallback_reply(message: str, rules: Iterable[FallbackRule] = FALLBACK_RULES) -> str:
    """Answer without the model using the first matching rule."""
    for rule in rules:
        if rule.matches(message):
            return rule.response
    return STANDBY_MESSAGE


def trim_history(history: Sequence[LLMMessage], window: int) -> list[LLMMessage]:
    """Keep the trailing user/assistant turns that have text content."""
    turns = [
        turn
        for turn in history
        if turn.role in CONVERSATION_ROLES and isinstance(turn.content, str)
    ]
    if window <= 0:
        return []
    return turns[-window:]


class AssistantDialogueRouter:
    """Routes free-text messages to the model or to an offline reply."""

    def __init__(
        self,
        gateway: ModelGateway,
        rules: Sequence[FallbackRule] = FALLBACK_RULES,
        history_window: Optional[int] = None,
    ):
        self.gateway = gateway
        self.rules = tuple(rules)
        self.history_window = settings.history_window if history_window is None else history_window

    async def reply(self, message: str, history: Sequence[LLMMessage] = ()) -> str:
        """
        Produce a reply to message, given earlier turns.

        Always returns a non-empty string. A missing credential yields the
        rule-based reply; a provider failure prefixes it with an apology.
        """
        context = trim_history(history, self.history_window)

        try:
            text = await self.gateway.converse(ASSISTANT_SYSTEM_PROMPT, context, message)
        except GatewayError as e:
            logger.warning(f"Dialogue degraded to offline reply: {e}")
            return f"{GATEWAY_APOLOGY} {self.offline_reply(message)}"
        except Exception:
            logger.exception("Unexpected dialogue failure, using offline reply")
            return f"{GATEWAY_APOLOGY} {self.offline_reply(message)}"

        if text is None:
            logger.debug("Model unavailable, answering from fallback rules")
            return self.offline_reply(message)

        return text.strip() or EMPTY_MODEL_REPLY

    def offline_reply(self, message: str) -> str:
        return fallback_reply(message, self.rules)
