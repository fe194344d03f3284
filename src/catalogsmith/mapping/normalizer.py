"""Header text canonicalization used for comparisons only."""

import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def normalize_header(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one space, and trim.

    >>> normalize_header("Product Title!")
    'product title'
    """
    return _NON_ALPHANUMERIC.sub(" ", text.lower()).strip()
