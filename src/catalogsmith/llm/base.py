"""Base model gateway interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class LLMMessage:
    """Message in a conversation."""

    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class ModelGateway(ABC):
    """
    Abstract access to a remote language model.

    Both calls return None when no credential is configured, which callers
    treat as "model unavailable" rather than as an error. Transport and
    provider failures raise GatewayError.
    """

    provider: str = "unknown"

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether a credential is present."""
        pass

    @abstractmethod
    async def converse(
        self, directive: str, history: list[LLMMessage], message: str
    ) -> Optional[str]:
        """Continue a conversation under a system directive."""
        pass

    @abstractmethod
    async def summarize(
        self, directive: str, prompt: str, max_tokens: Optional[int] = None
    ) -> Optional[str]:
        """Answer a single prompt under a system directive."""
        pass


class UnavailableGateway(ModelGateway):
    """Gateway used when no provider is configured at all."""

    provider = "none"

    @property
    def is_configured(self) -> bool:
        return False

    async def converse(
        self, directive: str, history: list[LLMMessage], message: str
    ) -> Optional[str]:
        return None

    async def summarize(
        self, directive: str, prompt: str, max_tokens: Optional[int] = None
    ) -> Optional[str]:
        return None
