"""Static alias table for canonical catalog fields.

Alias phrases are already in normalized form. Order matters: both the field
order and the alias order decide which raw column wins a synonym match.
"""

from types import MappingProxyType
from typing import Optional

SYNONYM_CATALOG = MappingProxyType(
    {
        "sku": ("sku", "asin", "item id", "parent sku", "product id"),
        "title": ("title", "product title", "item name", "product name"),
        "description": ("description", "product description", "long desc", "details"),
        "brand": ("brand", "brand name", "manufacturer"),
        "color": ("color", "colour", "shade"),
        "size": ("size", "dimension", "measurement"),
        "mrp": ("mrp", "maximum retail price", "list price"),
        "price": ("price", "selling price", "offer price", "sale price"),
        "quantity": ("quantity", "stock", "inventory", "available units"),
        "weight": ("weight", "item weight", "unit weight"),
        "material": ("material", "fabric", "primary material"),
        "category": (
            "category",
            "product type",
            "vertical",
            "myntra category",
            "flipkart category",
        ),
    }
)

CANONICAL_FIELDS = tuple(SYNONYM_CATALOG)


def aliases_of(canonical_field: str) -> tuple[str, ...]:
    """Return the alias phrases for a canonical field, or () if unknown."""
    return SYNONYM_CATALOG.get(canonical_field, ())


def canonical_field_for(normalized_header: str) -> Optional[str]:
    """Return the first canonical field listing this header as an alias."""
    for field, aliases in SYNONYM_CATALOG.items():
        if normalized_header in aliases:
            return field
    return None
