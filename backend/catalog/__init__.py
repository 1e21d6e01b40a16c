"""Mock catalog, supplier master and template seed data."""
from backend.catalog.mock_data import (
    get_catalog_items,
    get_open_requests,
    get_available_cards,
    get_existing_suppliers,
    get_default_terms_templates,
    get_default_email_templates,
)

__all__ = [
    "get_catalog_items",
    "get_open_requests",
    "get_available_cards",
    "get_existing_suppliers",
    "get_default_terms_templates",
    "get_default_email_templates",
]
