"""
Terms & conditions service: the draft's terms text and the in-memory terms
template library.

The library is shared by all drafts in the process and is lost on restart.
"""
import logging
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from backend.catalog import get_default_terms_templates
from backend.services.draft_service import get_draft_service, DraftService
from backend.services.errors import WizardError, RecordNotFoundError
from shared.constants import CUSTOM_TEMPLATE_ID
from shared.schemas import RFQDraft, TermsTemplate, Notice

logger = logging.getLogger(__name__)


class TermsService:
    """Terms text editing plus template save / update / delete."""

    def __init__(self, drafts: Optional[DraftService] = None):
        self.drafts = drafts or get_draft_service()
        self._templates: List[TermsTemplate] = get_default_terms_templates()

    # ==================== TEMPLATE LIBRARY ====================

    def list_templates(self) -> List[TermsTemplate]:
        return list(self._templates)

    def get_template(self, template_id: str) -> TermsTemplate:
        for template in self._templates:
            if template.id == template_id:
                return template
        raise RecordNotFoundError("Template", template_id)

    def update_template(self, template_id: str, name: str, content: str) -> Notice:
        """
        Rename / rewrite a template.

        Drafts currently using the template pick up the new content.
        """
        if not name.strip():
            raise WizardError("Error", "Please enter a template name.")
        template = self.get_template(template_id)
        template.name = name.strip()
        template.content = content
        for draft in self.drafts.all_drafts():
            if draft.terms.selected_template == template_id:
                draft.terms.terms = content
                self.drafts.section_changed(draft, "terms")
        logger.info(f"[TermsService] Updated template {template_id}")
        return Notice(title="Template Updated", description="The template has been updated successfully.")

    def delete_template(self, template_id: str) -> Notice:
        """Remove a template; drafts using it fall back to custom terms."""
        self.get_template(template_id)
        self._templates = [t for t in self._templates if t.id != template_id]
        for draft in self.drafts.all_drafts():
            if draft.terms.selected_template == template_id:
                draft.terms.selected_template = ""
        logger.info(f"[TermsService] Deleted template {template_id}")
        return Notice(title="Template Deleted", description="The template has been removed.")

    # ==================== DRAFT TERMS ====================

    def select_template(self, draft_id: str, template_id: str) -> RFQDraft:
        """
        Load a template's content into the draft.

        The "custom" pseudo-template only clears the selection; the text
        already entered is kept.
        """
        draft = self.drafts.get_draft(draft_id)
        if template_id == CUSTOM_TEMPLATE_ID:
            draft.terms.selected_template = ""
            return draft
        template = self.get_template(template_id)
        draft.terms.terms = template.content
        draft.terms.selected_template = template_id
        template.last_used = datetime.now()
        self.drafts.section_changed(draft, "terms")
        return draft

    def set_terms(self, draft_id: str, terms: str) -> RFQDraft:
        draft = self.drafts.get_draft(draft_id)
        draft.terms.terms = terms
        self.drafts.section_changed(draft, "terms")
        return draft

    def save_as_template(self, draft_id: str, name: str) -> TermsTemplate:
        """Store the draft's current terms as a new named template."""
        draft = self.drafts.get_draft(draft_id)
        if not name.strip():
            raise WizardError("Error", "Please enter a template name.")
        if not draft.terms.terms.strip():
            raise WizardError("Error", "Please enter terms and conditions before saving as template.")
        template = TermsTemplate(
            id=f"template_{uuid4().hex[:8]}",
            name=name.strip(),
            content=draft.terms.terms,
            created_at=datetime.now()
        )
        self._templates.append(template)
        logger.info(f"[TermsService] Saved terms template '{template.name}' from {draft_id}")
        return template


# Singleton
_terms_service = None


def get_terms_service() -> TermsService:
    global _terms_service
    if _terms_service is None:
        _terms_service = TermsService()
    return _terms_service
