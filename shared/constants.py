"""
Shared constants for the RFQ builder.
"""
import os
from enum import Enum

# Wizard sections, in display order
SECTIONS = ["general", "items", "questionnaire", "suppliers", "terms", "email"]

SECTION_TITLES = {
    "general": "General Details",
    "items": "Items",
    "questionnaire": "Questionnaire",
    "suppliers": "Suppliers",
    "terms": "Terms & Conditions",
    "email": "Email Template"
}

SECTION_DESCRIPTIONS = {
    "general": "Basic RFQ information and settings",
    "items": "Add and manage RFQ items",
    "questionnaire": "Configure supplier questionnaire",
    "suppliers": "Select and manage suppliers",
    "terms": "Set RFQ terms and conditions",
    "email": "Configure supplier email template"
}


# Where an RFQ line item came from
class ItemSource(str, Enum):
    CATALOG = "catalog"
    NEW = "new"
    REQUEST = "request"


class SupplierSource(str, Enum):
    EXISTING = "existing"
    NEW = "new"


class ScoringType(str, Enum):
    AUTOMATIC = "automatic"   # System scores against predefined criteria
    MANUAL = "manual"         # Responses reviewed and scored by hand


# Budget / delivery date applies to the whole RFQ or per item
class DetailLevel(str, Enum):
    GENERAL = "general"
    ITEM = "item"


# Toast variants
class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


UNGROUPED = "Ungrouped"

# Fields a list may be grouped by
ITEM_GROUP_FIELDS = {
    "category": "Category",
    "source": "Source",
    "unit": "Unit"
}

CARD_GROUP_FIELDS = {
    "scoring_type": "Scoring Type",
    "group": "Custom Group"
}

# Pseudo template id meaning "no template, write my own"
CUSTOM_TEMPLATE_ID = "custom"

# Dropdown options
PROJECTS = ["Project Alpha", "Project Beta", "Project Gamma", "Project Delta"]
BUDGETS = ["Budget A - $50K", "Budget B - $100K", "Budget C - $250K", "Budget D - $500K"]
CURRENCIES = ["USD", "EUR", "GBP", "JPY", "CAD", "AUD"]
PAYMENT_TERMS = ["Net 30", "Net 60", "Net 90", "2/10 Net 30", "COD", "Prepayment"]
ROUND_OPTIONS = [2, 3]

UNITS = ["pcs", "kg", "lbs", "meters", "liters", "hours", "licenses", "events"]
ITEM_CATEGORIES = ["Electronics", "Furniture", "Software", "Marketing", "Services", "Office Supplies"]
SUPPLIER_CATEGORIES = [
    "Electronics", "Furniture", "Software", "Marketing",
    "Services", "Industrial", "Manufacturing", "Logistics"
]
RATING_FILTERS = [3.0, 4.0, 4.5]

DEFAULT_UNIT = "pcs"
DEFAULT_CURRENCY = "USD"
DEFAULT_SCORING_WEIGHT = 10
DEFAULT_MAX_SCORE = 100


# Backend location for the frontend client
API_BASE_URL = os.getenv("RFQ_API_BASE_URL", "http://localhost:8000")
