"""
Centralized normalization utilities for item names and search terms.
"""

import re


def normalize_item_key(name: str) -> str:
    """
    Derives the lookup key used by the item-name correction table.

    Transformation pipeline:
    1. Force lowercase
    2. Collapse every whitespace run into a single underscore

    Leading/trailing whitespace is not stripped, so " kopi" keys as "_kopi"
    and never matches the table.
    """
    if not name:
        return ""
    return re.sub(r'\s+', '_', name.lower())


def normalize_search_term(term: str) -> str:
    """Lowercases and trims a free-text search term."""
    return (term or "").strip().lower()
