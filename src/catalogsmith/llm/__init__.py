"""Model gateway module."""

import logging
from typing import Optional

from ..config import Settings, settings as default_settings
from .base import LLMMessage, ModelGateway, UnavailableGateway
from .anthropic_client import AnthropicGateway
from .openrouter_client import OpenRouterGateway
from .prompts import (
    ASSISTANT_SYSTEM_PROMPT,
    ENRICHMENT_SYSTEM_PROMPT,
    build_enrichment_prompt,
)

logger = logging.getLogger(__name__)


def create_gateway(config: Optional[Settings] = None) -> ModelGateway:
    """Create the gateway for the configured provider.

    A missing API key is not an error: the gateway is still built and simply
    reports the model as unavailable on every call.
    """
    config = config or default_settings
    if config.llm_provider == "openrouter":
        gateway: ModelGateway = OpenRouterGateway(
            api_key=config.openrouter_api_key,
            model=config.openrouter_model,
            base_url=config.openrouter_base_url,
            max_tokens=config.max_tokens,
            timeout=config.gateway_timeout_seconds,
        )
    elif config.llm_provider == "anthropic":
        gateway = AnthropicGateway(
            api_key=config.anthropic_api_key,
            model=config.model_name,
            max_tokens=config.max_tokens,
            timeout=config.gateway_timeout_seconds,
        )
    else:
        logger.warning(f"Unknown LLM_PROVIDER '{config.llm_provider}', running without a model")
        return UnavailableGateway()

    if not gateway.is_configured:
        logger.info(f"No API key for {gateway.provider}; assistant will use offline replies")
    return gateway


__all__ = [
    "LLMMessage",
    "ModelGateway",
    "UnavailableGateway",
    "AnthropicGateway",
    "OpenRouterGateway",
    "ASSISTANT_SYSTEM_PROMPT",
    "ENRICHMENT_SYSTEM_PROMPT",
    "build_enrichment_prompt",
    "create_gateway",
]
