"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..agent import AssistantDialogueRouter, EnrichmentOrchestrator
from ..config import settings
from ..llm import create_gateway
from ..modes.router import ModeRouter
from .routes import router

logger = logging.getLogger(__name__)

# Global mode router instance
_mode_router: Optional[ModeRouter] = None


def get_mode_router() -> ModeRouter:
    """Get the global mode router, wiring it to the configured gateway."""
    global _mode_router
    if _mode_router is None:
        gateway = create_gateway(settings)
        _mode_router = ModeRouter(
            dialogue=AssistantDialogueRouter(gateway),
            enrichment=EnrichmentOrchestrator(gateway),
        )
    return _mode_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="CatalogSmith",
        description="Marketplace catalog builder with an offline-capable assistant",
        version="0.1.0",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(router, prefix="/api")

    return app
