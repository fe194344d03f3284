"""Configuration management for CatalogSmith."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # LLM Provider settings ('anthropic' or 'openrouter')
    llm_provider: str = os.getenv("LLM_PROVIDER", "anthropic")

    # Anthropic API key; without it the gateway reports itself unavailable
    anthropic_api_key: Optional[str] = os.getenv("ANTHROPIC_API_KEY")

    # OpenRouter API configuration
    openrouter_api_key: Optional[str] = os.getenv("OPENROUTER_API_KEY")
    openrouter_model: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
    openrouter_base_url: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Model configuration
    model_name: str = os.getenv("MODEL_NAME", "claude-3-5-haiku-latest")
    max_tokens: int = int(os.getenv("MAX_TOKENS", "1024"))
    enrichment_max_tokens: int = int(os.getenv("ENRICHMENT_MAX_TOKENS", "600"))
    gateway_timeout_seconds: float = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "60"))

    # Conversation and enrichment payload limits
    history_window: int = int(os.getenv("HISTORY_WINDOW", "6"))
    enrichment_sample_limit: int = int(os.getenv("ENRICHMENT_SAMPLE_LIMIT", "5"))

    # Catalog builder
    preview_row_limit: int = int(os.getenv("PREVIEW_ROW_LIMIT", "25"))
    default_marketplace: str = os.getenv("DEFAULT_MARKETPLACE", "Amazon")

    @property
    def active_model(self) -> str:
        """Model identifier for the configured provider."""
        if self.llm_provider == "openrouter":
            return self.openrouter_model
        return self.model_name


settings = Settings()
