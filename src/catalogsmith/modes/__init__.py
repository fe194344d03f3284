"""Request modes for the assistant endpoint."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class AssistantMode(str, Enum):
    """What the caller wants from the assistant."""

    VOICE = "voice"  # Transcribed speech, answered like text
    TEXT = "text"  # Typed chat message
    CATALOG_ENRICHMENT = "catalog-enrichment"  # Insight bullets for a catalog sample


class AssistantRequest(BaseModel):
    """Body of an assistant request."""

    mode: AssistantMode = Field(
        default=AssistantMode.TEXT,
        description="Processing mode",
    )
    message: str = Field(default="", description="User message for voice/text modes")
    history: list[Any] = Field(
        default_factory=list,
        description="Prior turns as {role, content}; malformed entries are ignored",
    )
    marketplace: Optional[str] = Field(
        default=None,
        description="Target marketplace for catalog enrichment",
    )
    sample: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Materialized catalog rows for catalog enrichment",
    )


class AssistantResponse(BaseModel):
    """Either a chat reply or a list of enrichment insights."""

    reply: Optional[str] = None
    enrichment: Optional[list[str]] = None


__all__ = [
    "AssistantMode",
    "AssistantRequest",
    "AssistantResponse",
]
