"""OpenRouter model gateway."""

from typing import Optional

import httpx

from ..exceptions import GatewayError
from .base import LLMMessage, ModelGateway


class OpenRouterGateway(ModelGateway):
    """OpenRouter HTTP API gateway (OpenAI-compatible chat completions)."""

    provider = "openrouter"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        max_tokens: int = 1024,
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.max_tokens = max_tokens
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def converse(
        self, directive: str, history: list[LLMMessage], message: str
    ) -> Optional[str]:
        messages = [{"role": "system", "content": directive}]
        messages.extend(turn.to_dict() for turn in history)
        messages.append({"role": "user", "content": message})
        return await self._chat_completion(messages, self.max_tokens)

    async def summarize(
        self, directive: str, prompt: str, max_tokens: Optional[int] = None
    ) -> Optional[str]:
        messages = [
            {"role": "system", "content": directive},
            {"role": "user", "content": prompt},
        ]
        return await self._chat_completion(messages, max_tokens or self.max_tokens)

    async def _chat_completion(self, messages: list[dict], max_tokens: int) -> Optional[str]:
        if not self.api_key:
            return None

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-Title": "CatalogSmith",
        }
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise GatewayError(self.provider, str(e)) from e
        except ValueError as e:
            raise GatewayError(self.provider, f"invalid JSON response: {e}") from e

        return self._extract_text(data)

    def _extract_text(self, data: dict) -> str:
        """Pull the assistant text out of a chat completion response."""
        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            raise GatewayError(self.provider, f"unexpected response shape: {e}") from e
        return message.get("content") or ""
