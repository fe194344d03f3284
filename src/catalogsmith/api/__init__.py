"""HTTP API for CatalogSmith."""

from .app import create_app

__all__ = ["create_app"]
