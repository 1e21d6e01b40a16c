"""
RFQ-level "Save as Template" service.

Snapshots a whole draft under a name. Saving waits the simulated delay and
then keeps the template in memory; there is no backend call.
"""
import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import uuid4

from backend.services import feature_flags
from backend.services.draft_service import get_draft_service, DraftService
from backend.services.errors import WizardError
from backend.wizard.progress import CompletionTracker
from backend.wizard.summary import summarize_draft
from shared.schemas import RFQTemplate, SectionSummary, Notice

logger = logging.getLogger(__name__)


class RFQTemplateService:
    """In-memory library of whole-RFQ templates."""

    def __init__(self, drafts: Optional[DraftService] = None):
        self.drafts = drafts or get_draft_service()
        self._templates: List[RFQTemplate] = []

    def list_templates(self) -> List[RFQTemplate]:
        return list(self._templates)

    def preview(self, draft_id: str) -> List[SectionSummary]:
        """Section summaries shown before saving."""
        return summarize_draft(self.drafts.get_draft(draft_id))

    async def save_template(self, draft_id: str, name: str, description: str = "") -> Tuple[RFQTemplate, Notice]:
        """
        Save the draft as a named template.

        Returns (template, notice). Needs a non-empty name and at least one
        completed section.
        """
        draft = self.drafts.get_draft(draft_id)
        if not name.strip():
            raise WizardError("Error", "Please enter a template name.")
        if not CompletionTracker(draft).can_save_template:
            raise WizardError("Error", "Complete at least one section before saving as template.")

        await asyncio.sleep(feature_flags.SIMULATED_SAVE_DELAY_SECONDS)

        template = RFQTemplate(
            id=f"template_{uuid4().hex[:8]}",
            name=name.strip(),
            description=description.strip(),
            data=draft.to_document(),
            created_at=datetime.now(),
            sections=len(summarize_draft(draft))
        )
        self._templates.append(template)
        logger.info(
            f"[RFQTemplateService] Saved RFQ template '{template.name}' "
            f"({template.sections} sections) from {draft_id}"
        )
        notice = Notice(
            title="Template Saved",
            description=f'"{template.name}" has been saved successfully and can be reused for future RFQs.'
        )
        return template, notice


# Singleton
_template_service = None


def get_template_service() -> RFQTemplateService:
    global _template_service
    if _template_service is None:
        _template_service = RFQTemplateService()
    return _template_service
