"""
Section completion requirements.

Single source of truth for what each wizard section needs before it counts
as complete. Used by the completion tracker and by the UI hints.
"""

from typing import Dict, List, Any

SECTION_REQUIREMENTS: Dict[str, Dict[str, Any]] = {
    "general": {
        "description": "All basic information fields filled in",
        "required_fields": [
            "name", "requesters", "assignee", "project",
            "budget", "department", "location"
        ],
        "min_entries": 0,
        # Any non-empty value counts, spaces included
        "strip_whitespace": False,
    },
    "items": {
        "description": "At least one item added",
        "required_fields": [],
        "min_entries": 1,
    },
    "questionnaire": {
        "description": "At least one information card added",
        "required_fields": [],
        "min_entries": 1,
    },
    "suppliers": {
        "description": "At least one supplier selected",
        "required_fields": [],
        "min_entries": 1,
    },
    "terms": {
        "description": "Terms & conditions text entered",
        "required_fields": ["terms"],
        "min_entries": 0,
        "strip_whitespace": True,
    },
    "email": {
        "description": "Email subject and body entered",
        "required_fields": ["subject", "body"],
        "min_entries": 0,
        "strip_whitespace": True,
    }
}


def get_requirement_description(section: str) -> str:
    """Get human-readable requirement for a section."""
    requirements = SECTION_REQUIREMENTS.get(section, {})
    return requirements.get("description", section)


def get_required_fields(section: str) -> List[str]:
    """Get the fields that must be non-empty for a section."""
    return SECTION_REQUIREMENTS.get(section, {}).get("required_fields", [])


def get_missing_fields(section: str, data: Dict[str, Any]) -> List[str]:
    """
    List required fields that are still empty.

    Sections flagged strip_whitespace treat "   " as empty.
    """
    strip = SECTION_REQUIREMENTS.get(section, {}).get("strip_whitespace", False)
    missing = []
    for field in get_required_fields(section):
        value = data.get(field)
        if strip and isinstance(value, str):
            value = value.strip()
        if not value:
            missing.append(field)
    return missing
