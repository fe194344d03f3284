"""CatalogSmith - reconcile vendor inventory sheets into marketplace catalog templates."""

__version__ = "0.1.0"
