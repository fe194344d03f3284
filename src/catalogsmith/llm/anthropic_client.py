"""Anthropic model gateway."""

from typing import Optional

from anthropic import APIError, AsyncAnthropic

from ..exceptions import GatewayError
from .base import LLMMessage, ModelGateway


class AnthropicGateway(ModelGateway):
    """Anthropic Claude gateway."""

    provider = "anthropic"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        max_tokens: int = 1024,
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout) if api_key else None

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def converse(
        self, directive: str, history: list[LLMMessage], message: str
    ) -> Optional[str]:
        messages = [turn.to_dict() for turn in history]
        messages.append({"role": "user", "content": message})
        return await self._create_message(directive, messages, self.max_tokens)

    async def summarize(
        self, directive: str, prompt: str, max_tokens: Optional[int] = None
    ) -> Optional[str]:
        messages = [{"role": "user", "content": prompt}]
        return await self._create_message(directive, messages, max_tokens or self.max_tokens)

    async def _create_message(
        self, system: str, messages: list[dict], max_tokens: int
    ) -> Optional[str]:
        if self.client is None:
            return None

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=system,
                messages=_merge_consecutive_roles(messages),
            )
        except APIError as e:
            raise GatewayError(self.provider, str(e)) from e

        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )


def _merge_consecutive_roles(messages: list[dict]) -> list[dict]:
    """Join adjacent same-role turns; the messages API requires alternation."""
    merged: list[dict] = []
    for msg in messages:
        if merged and merged[-1]["role"] == msg["role"]:
            merged[-1] = {
                "role": msg["role"],
                "content": f"{merged[-1]['content']}\n\n{msg['content']}",
            }
        else:
            merged.append(dict(msg))
    # The conversation must open with a user turn
    while merged and merged[0]["role"] != "user":
        merged.pop(0)
    return merged
