"""
Shared fixtures for backend tests.
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from backend.services import feature_flags
from backend.services.draft_service import DraftService
from shared.schemas import GeneralDetailsUpdate


@pytest.fixture
def drafts():
    """A fresh, empty draft store per test."""
    return DraftService()


@pytest.fixture
def draft(drafts):
    return drafts.create_draft()


@pytest.fixture
def no_delay(monkeypatch):
    """Make the simulated saves return immediately."""
    monkeypatch.setattr(feature_flags, "SIMULATED_SAVE_DELAY_SECONDS", 0)


@pytest.fixture
def filled_general():
    return GeneralDetailsUpdate(
        name="Office Equipment RFQ 2024",
        requesters="John Smith",
        assignee="Jane Doe",
        project="Office Renovation",
        budget="Q1 Budget",
        department="Procurement",
        location="New York"
    )
