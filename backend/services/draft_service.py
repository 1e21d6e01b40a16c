"""
RFQ draft management service.

Drafts live in process memory only. Every section service goes through this
service to load a draft and to report that a section changed, which is where
completion is re-evaluated.
"""
import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from backend.services import feature_flags
from backend.services.errors import DraftNotFoundError, WizardError
from backend.wizard.progress import CompletionTracker, missing_requirements
from shared.constants import SECTION_TITLES
from shared.schemas import (
    RFQDraft, GeneralDetails, GeneralDetailsUpdate, DraftResponse, DraftSummary, Notice,
    ProgressResponse
)

logger = logging.getLogger(__name__)


class DraftService:
    """
    Service for RFQ drafts.

    Holds one draft per wizard session, keyed by draft id.
    """

    def __init__(self):
        self._drafts: Dict[str, RFQDraft] = {}

    # ==================== LIFECYCLE ====================

    def create_draft(self) -> RFQDraft:
        draft = RFQDraft(draft_id=f"RFQ-{uuid4().hex[:8].upper()}")
        self._drafts[draft.draft_id] = draft
        logger.info(f"[DraftService] Created draft {draft.draft_id}")
        return draft

    def get_draft(self, draft_id: str) -> RFQDraft:
        draft = self._drafts.get(draft_id)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        return draft

    def list_drafts(self, limit: int = 50) -> List[DraftSummary]:
        drafts = sorted(self._drafts.values(), key=lambda d: d.updated_at, reverse=True)
        return [
            DraftSummary(
                draft_id=d.draft_id,
                name=d.general.name or "Untitled RFQ",
                percent_display=CompletionTracker(d).to_response().percent_display,
                updated_at=d.updated_at
            )
            for d in drafts[:limit]
        ]

    def all_drafts(self) -> List[RFQDraft]:
        return list(self._drafts.values())

    def delete_draft(self, draft_id: str) -> None:
        self.get_draft(draft_id)
        del self._drafts[draft_id]
        logger.info(f"[DraftService] Deleted draft {draft_id}")

    # ==================== SECTION BOOKKEEPING ====================

    def section_changed(self, draft: RFQDraft, section: str) -> bool:
        """Stamp the draft and re-check the changed section's completion."""
        draft.updated_at = datetime.now()
        return CompletionTracker(draft).evaluate(section)

    def get_progress(self, draft_id: str) -> ProgressResponse:
        return CompletionTracker(self.get_draft(draft_id)).to_response()

    def respond(self, draft: RFQDraft, notice: Optional[Notice] = None) -> DraftResponse:
        return DraftResponse(
            draft=draft,
            progress=CompletionTracker(draft).to_response(),
            notice=notice
        )

    # ==================== GENERAL DETAILS ====================

    def update_general(self, draft_id: str, updates: GeneralDetailsUpdate) -> RFQDraft:
        """Merge the fields that were sent into the general details."""
        draft = self.get_draft(draft_id)
        changes = {
            field: value
            for field, value in updates.model_dump(exclude_unset=True).items()
            # Only the delivery date may be cleared back to None
            if value is not None or field == "expected_delivery_date"
        }
        try:
            # The merged result must satisfy GeneralDetails bounds
            draft.general = GeneralDetails.model_validate({**draft.general.model_dump(), **changes})
        except ValidationError as e:
            raise WizardError("Invalid general details", str(e.errors()[0]["msg"]))
        self.section_changed(draft, "general")
        return draft

    # ==================== SAVE / CREATE ====================

    async def save_draft(self, draft_id: str) -> Notice:
        """
        Simulated save: waits a fixed delay and reports success.

        Nothing is written anywhere; the draft only lives in memory.
        """
        draft = self.get_draft(draft_id)
        await asyncio.sleep(feature_flags.SIMULATED_SAVE_DELAY_SECONDS)
        logger.info(f"[DraftService] Simulated save of draft {draft_id}")
        name = draft.general.name or "Untitled RFQ"
        return Notice(title="Draft Saved", description=f'"{name}" has been saved as a draft.')

    def create_rfq(self, draft_id: str) -> Dict:
        """
        Produce the final RFQ document.

        Only allowed once every section is complete.
        """
        draft = self.get_draft(draft_id)
        tracker = CompletionTracker(draft)
        if not tracker.can_create_rfq:
            missing = missing_requirements(draft)
            logger.warning(f"[DraftService] Create RFQ rejected for {draft_id}; incomplete: {list(missing)}")
            names = ", ".join(SECTION_TITLES[s] for s in missing)
            raise WizardError("RFQ incomplete", f"Complete these sections first: {names}")
        logger.info(f"[DraftService] RFQ created from draft {draft_id}")
        return draft.to_document()


# Singleton
_draft_service = None


def get_draft_service() -> DraftService:
    global _draft_service
    if _draft_service is None:
        _draft_service = DraftService()
    return _draft_service
