"""
hotel_california.localization

Localization layer.

Responsibilities:
- Message catalog loading and per-request translation.
"""

from hotel_california.localization.catalog import (
    CatalogError,
    MessageCatalog,
    Translator,
    parse_accept_language,
)

__all__ = ["CatalogError", "MessageCatalog", "Translator", "parse_accept_language"]
